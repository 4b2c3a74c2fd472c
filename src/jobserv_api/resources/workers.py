"""Build workers."""
from .base import JobServ


class Workers(JobServ):
    BASE_PATH = '/workers/'
