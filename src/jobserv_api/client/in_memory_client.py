"""
In-memory fetcher using FastAPI TestClient.

Routes requests to an ASGI application instead of the network. Used by the
test suites and for local development against a stub service.
"""
from urllib.parse import urlsplit, urlunsplit

from requests.structures import CaseInsensitiveDict

from .base_client import Fetcher


class InMemoryFetcher(Fetcher):
    """In-memory fetcher using FastAPI TestClient.

    Only the path and query of the URL are forwarded; the scheme and host are
    those of the TestClient.
    """

    def __init__(self, fastapi_client, default_headers=None, record=False):
        """Initialize with FastAPI TestClient instance.

        Args:
            fastapi_client: FastAPI TestClient instance
            default_headers: Optional default headers to include in all requests
            record: Keep (method, target) of each call in ``calls``
        """
        self.client = fastapi_client
        self.default_headers = default_headers or {}
        self.record = record
        self.calls = []

    def __call__(self, url, options):
        parts = urlsplit(url)
        target = urlunsplit(('', '', parts.path or '/', parts.query, ''))

        # Request headers replace defaults regardless of name case
        merged_headers = CaseInsensitiveDict(self.default_headers)
        merged_headers.update(options.get('headers') or {})

        if self.record:
            self.calls.append((options['method'], target))
        return self.client.request(
            options['method'],
            target,
            headers=dict(merged_headers.items()),
            content=options.get('body'),
        )
