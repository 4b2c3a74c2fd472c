"""
HTTP client core for the JobServ API.

Provides the transport, the response envelope and the fetcher implementations.
"""

from .base_client import Fetcher
from .in_memory_client import InMemoryFetcher
from .models import PaginationInfo, RequestDescriptor, Verb
from .remote_client import Remote, RequestsFetcher, join_path, serialize_body
from .response import APIResponse, create_response

__all__ = [
    'Fetcher',
    'InMemoryFetcher',
    'RequestsFetcher',
    'Remote',
    'APIResponse',
    'create_response',
    'RequestDescriptor',
    'PaginationInfo',
    'Verb',
    'join_path',
    'serialize_body',
]
