"""
Client library for the JobServ build and OTA orchestration API.
"""

__version__ = '5.0.0'

from .api import JobServClient
from .client import APIResponse, RequestDescriptor, Remote, Verb, create_response
from .exceptions import ConfigurationError, DecodeError, ErrorKind, HTTPError, JobServError

__all__ = [
    'JobServClient',
    'Remote',
    'APIResponse',
    'RequestDescriptor',
    'Verb',
    'create_response',
    'JobServError',
    'HTTPError',
    'DecodeError',
    'ConfigurationError',
    'ErrorKind',
]
