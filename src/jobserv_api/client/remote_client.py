"""
Remote HTTP transport using requests library.

Builds outgoing requests from descriptors and performs them through a
pluggable fetcher. The default fetcher shares one keep-alive session across
the process.
"""
import json
import logging
import re
import threading
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlencode, urljoin

import requests
from pydantic import BaseModel
from requests.structures import CaseInsensitiveDict

from .. import __version__
from .base_client import Fetcher
from .models import RequestDescriptor, Verb, has_body
from .response import APIResponse, create_response

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f'fio-jobserv-api/{__version__}'
DEFAULT_CONTENT_TYPE = 'application/json'

_REPEATED_SEPARATORS = re.compile(r'/{2,}')

_session: Optional[requests.Session] = None
_session_lock = threading.Lock()


def get_session() -> requests.Session:
    """Return the process-wide session, creating it on first use."""
    global _session
    with _session_lock:
        if _session is None:
            _session = requests.Session()
            logger.debug("Created shared HTTP session")
        return _session


def close_session():
    """Close the process-wide session; the next call creates a new one."""
    global _session
    with _session_lock:
        if _session is not None:
            _session.close()
            _session = None


class RequestsFetcher(Fetcher):
    """Default fetcher backed by a requests session.

    Bodies are streamed so the response envelope is the only reader.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self._session = session

    @property
    def session(self) -> requests.Session:
        return self._session if self._session is not None else get_session()

    def __call__(self, url, options):
        return self.session.request(
            options['method'],
            url,
            headers=options.get('headers'),
            data=options.get('body'),
            stream=True,
            allow_redirects=True,
        )


def join_path(base_path: Optional[str], path: Optional[str] = None) -> str:
    """Join a base path and a relative path, collapsing repeated separators.

    >>> join_path('/a/', '//b/')
    '/a/b/'
    """
    joined = base_path or '/'
    if path:
        joined = f"{joined}/{path}"
    joined = _REPEATED_SEPARATORS.sub('/', joined)
    if not joined.startswith('/'):
        joined = '/' + joined
    return joined


def serialize_body(body: Any) -> Union[bytes, str, None]:
    """Serialize a request body.

    Bytes and text pass through unchanged; anything else is encoded as compact
    JSON. None and empty bodies yield None.
    """
    if not has_body(body):
        return None
    if isinstance(body, (str, bytes)):
        return body
    if isinstance(body, (bytearray, memoryview)):
        return bytes(body)
    if isinstance(body, BaseModel):
        return body.model_dump_json().encode('utf-8')
    return json.dumps(body, separators=(',', ':')).encode('utf-8')


class Remote:
    """HTTP transport for one JobServ service address.

    Resources hold a ``Remote`` and pass their base path with each call.
    """

    def __init__(self, address: str, fetcher: Optional[Fetcher] = None,
                 user_agent: str = None, content_type: str = None, base_path: str = '/'):
        """Initialize with the service address.

        Args:
            address: Base URL of the service (e.g., https://api.foundries.io)
            fetcher: Network call implementation; defaults to RequestsFetcher
            user_agent: Client identifier sent with every request
            content_type: Content type set when a body is sent without one
            base_path: Path used when a call does not name one
        """
        self.address = address
        self.fetcher = fetcher if fetcher is not None else RequestsFetcher()
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.content_type = content_type or DEFAULT_CONTENT_TYPE
        self.base_path = base_path

    def build_url(self, base_path: Optional[str] = None, path: Optional[str] = None,
                  query: Optional[Mapping[str, Any]] = None) -> str:
        """Build the absolute request URL."""
        url = urljoin(self.address, join_path(base_path or self.base_path, path))
        if query:
            params = [(key, value) for key, value in query.items() if value is not None]
            if params:
                url = f"{url}?{urlencode(params, doseq=True)}"
        return url

    def serialize_body(self, body: Any) -> Union[bytes, str, None]:
        return serialize_body(body)

    def build_headers(self, headers: Optional[Mapping[str, str]], body) -> CaseInsensitiveDict:
        merged = CaseInsensitiveDict(headers or {})
        merged['User-Agent'] = self.user_agent
        if body is not None and 'Content-Type' not in merged:
            merged['Content-Type'] = self.content_type
        return merged

    def execute(self, descriptor: RequestDescriptor, base_path: Optional[str] = None):
        """Perform one network call for ``descriptor`` and return the raw response.

        Status codes are not interpreted here and network errors propagate
        unchanged.
        """
        body = self.serialize_body(descriptor.body)
        url = self.build_url(base_path, descriptor.path, descriptor.query)
        options = {
            'method': descriptor.verb.value,
            'headers': self.build_headers(descriptor.headers, body),
            'body': body,
        }

        fetch = descriptor.transport_override or self.fetcher
        logger.debug(f"{options['method']} {url}")
        return fetch(url, options)

    def request(self, descriptor: Optional[RequestDescriptor] = None,
                base_path: Optional[str] = None, **fields) -> APIResponse:
        """Perform a request and return its envelope.

        Either pass a ``RequestDescriptor`` or its fields as keyword arguments.

        Raises:
            HTTPError: If the response status is outside [200, 300)
        """
        if descriptor is None:
            descriptor = RequestDescriptor(**fields)
        elif fields:
            descriptor = RequestDescriptor(**{**dict(descriptor), **fields})
        return create_response(self.execute(descriptor, base_path=base_path))

    def get(self, path=None, base_path=None, **fields) -> APIResponse:
        return self.request(base_path=base_path, path=path, verb=Verb.GET, **fields)

    def post(self, path=None, body=None, base_path=None, **fields) -> APIResponse:
        return self.request(base_path=base_path, path=path, body=body, verb=Verb.POST, **fields)

    def put(self, path=None, body=None, base_path=None, **fields) -> APIResponse:
        return self.request(base_path=base_path, path=path, body=body, verb=Verb.PUT, **fields)

    def patch(self, path=None, body=None, base_path=None, **fields) -> APIResponse:
        return self.request(base_path=base_path, path=path, body=body, verb=Verb.PATCH, **fields)

    def delete(self, path=None, body=None, base_path=None, **fields) -> APIResponse:
        return self.request(base_path=base_path, path=path, body=body, verb=Verb.DELETE, **fields)

    def head(self, path=None, base_path=None, **fields) -> APIResponse:
        return self.request(base_path=base_path, path=path, verb=Verb.HEAD, **fields)

    def options(self, path=None, base_path=None, **fields) -> APIResponse:
        return self.request(base_path=base_path, path=path, verb=Verb.OPTIONS, **fields)
