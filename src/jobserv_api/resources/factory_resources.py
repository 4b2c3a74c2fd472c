"""Factory resources addressed by full path from the service root."""
from .base import JobServ


class FactoryResources(JobServ):
    """Resource-agnostic access rooted at '/'."""

    BASE_PATH = '/'
