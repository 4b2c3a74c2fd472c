"""
Generic JobServ resource.

A resource owns an immutable base path and issues requests through a shared
``Remote``. Endpoint modules only add path templates on top of these verbs.
"""
from typing import Any, Optional

from ..client.models import RequestDescriptor, Verb
from ..client.remote_client import Remote
from ..client.response import APIResponse


class JobServ:
    """CRUD operations relative to ``base_path``.

    Every method accepts ``query``, ``headers`` and ``transport_override`` as
    keyword arguments and returns an ``APIResponse``; non-2xx responses raise
    ``HTTPError``.
    """

    BASE_PATH = '/'

    def __init__(self, remote: Remote, base_path: Optional[str] = None):
        self.remote = remote
        base_path = base_path or self.BASE_PATH
        self._base_path = base_path if base_path.endswith('/') else base_path + '/'

    @property
    def base_path(self) -> str:
        return self._base_path

    def _request(self, verb: Verb, path: Optional[str] = None, body: Any = None, **options) -> APIResponse:
        descriptor = RequestDescriptor(verb=verb, path=path, body=body, **options)
        return self.remote.request(descriptor, base_path=self._base_path)

    def list(self, path: Optional[str] = None, **options) -> APIResponse:
        """Retrieve all data at the specified path."""
        return self._request(Verb.GET, path, **options)

    def find(self, path: Optional[str] = None, **options) -> APIResponse:
        """Get all data at the specified path."""
        return self._request(Verb.GET, path, **options)

    def find_by_id(self, id: str, **options) -> APIResponse:
        """Retrieve a resource by its id."""
        return self._request(Verb.GET, id, **options)

    def create(self, path: Optional[str] = None, data: Any = None, body: Any = None, **options) -> APIResponse:
        """Create a resource; ``data`` is an alias for ``body``."""
        return self._request(Verb.POST, path, data if data is not None else body, **options)

    def update(self, path: Optional[str] = None, data: Any = None, body: Any = None, **options) -> APIResponse:
        """Update a resource with PATCH; ``data`` is an alias for ``body``."""
        return self._request(Verb.PATCH, path, data if data is not None else body, **options)

    def remove(self, path: Optional[str] = None, data: Any = None, **options) -> APIResponse:
        """Remove a resource."""
        return self._request(Verb.DELETE, path, data, **options)
