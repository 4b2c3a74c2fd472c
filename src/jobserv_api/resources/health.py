"""Health check runs."""
from .base import JobServ


class Health(JobServ):
    BASE_PATH = '/health/runs/'
