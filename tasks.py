"""Task collection for the jobserv-api repository.

Tasks are defined in jobserv_api.tasks.
"""

from jobserv_api.tasks import namespace
