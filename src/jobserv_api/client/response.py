"""
Response envelope for JobServ API calls.

Wraps exactly one raw HTTP response and provides a memoized view over its
body regardless of the underlying HTTP library. The body is drained at most
once; the first materialization is serialized per envelope so concurrent
readers never race on a single-read stream.
"""
import json
import logging
import re
import threading
from concurrent.futures import Future
from typing import Any, Dict, Optional

from requests.structures import CaseInsensitiveDict

from ..exceptions import DecodeError, HTTPError, classify_status
from .models import PaginationInfo

logger = logging.getLogger(__name__)

_JSON_TYPE = re.compile(r'^application/json', re.IGNORECASE)
_TEXT_TYPE = re.compile(r'^text/', re.IGNORECASE)
_CHARSET = re.compile(r'charset=([\w.:-]+)', re.IGNORECASE)


def _drain(raw) -> bytes:
    """Read the complete body of ``raw`` once, then close ``raw``.

    Supports ``content`` (requests and httpx responses), ``body`` (bytes, str,
    file-like or an iterable of chunks) and ``read()``. Closing returns a
    streamed connection to its pool.
    """
    try:
        return _read_body(raw)
    finally:
        close = getattr(raw, 'close', None)
        if callable(close):
            close()


def _read_body(raw) -> bytes:
    if hasattr(raw, 'content'):
        return bytes(raw.content or b'')

    body = getattr(raw, 'body', None)
    if body is not None:
        if hasattr(body, 'read'):
            body = body.read()
        if isinstance(body, str):
            return body.encode('utf-8')
        if isinstance(body, (bytes, bytearray, memoryview)):
            return bytes(body)
        return b''.join(
            chunk.encode('utf-8') if isinstance(chunk, str) else bytes(chunk)
            for chunk in body
        )

    if hasattr(raw, 'read'):
        return bytes(raw.read() or b'')

    return b''


class APIResponse:
    """Uniform, memoized view over one raw HTTP response.

    Accepts any object exposing a status (``status_code`` or ``status``),
    ``headers`` and a body (see ``_drain``).
    """

    def __init__(self, raw):
        self._raw = raw
        self._lock = threading.RLock()
        self._cache: Dict[str, tuple] = {}
        self._headers = CaseInsensitiveDict(getattr(raw, 'headers', None) or {})

    def _materialize(self, slot: str, compute):
        """Compute ``slot`` once under the envelope lock.

        A failure is cached as well and re-raised to every later caller.
        """
        with self._lock:
            if slot not in self._cache:
                try:
                    self._cache[slot] = (compute(), None)
                except Exception as e:
                    self._cache[slot] = (None, e)
            value, error = self._cache[slot]
        if error is not None:
            raise error
        return value

    @property
    def raw(self):
        return self._raw

    @property
    def headers(self) -> CaseInsensitiveDict:
        return self._headers

    @property
    def status(self) -> Optional[int]:
        status = getattr(self._raw, 'status_code', None)
        if status is None:
            status = getattr(self._raw, 'status', None)
        return int(status) if status is not None else None

    @property
    def status_code(self) -> Optional[int]:
        return self.status

    @property
    def reason(self) -> Optional[str]:
        reason = getattr(self._raw, 'reason', None) or getattr(self._raw, 'reason_phrase', None)
        return reason or None

    @property
    def content_type(self) -> Optional[str]:
        return self._headers.get('content-type')

    @property
    def content_encoding(self) -> Optional[str]:
        return self._headers.get('content-encoding')

    @property
    def length(self) -> Optional[str]:
        return self._headers.get('content-length')

    @property
    def ok(self) -> bool:
        status = self.status
        return status is not None and 200 <= status < 300

    def is_json(self) -> bool:
        return bool(self.content_type and _JSON_TYPE.match(self.content_type))

    def is_text(self) -> bool:
        """True for ``text/*`` bodies and for JSON, which is text as well."""
        return bool(self.content_type and _TEXT_TYPE.match(self.content_type)) or self.is_json()

    def _charset(self) -> str:
        match = _CHARSET.search(self.content_type or '')
        return match.group(1) if match else 'utf-8'

    def buffer(self) -> bytes:
        """Return the raw body bytes, reading the underlying response only once."""
        return self._materialize('buffer', lambda: _drain(self._raw))

    def text(self) -> Optional[str]:
        """Return the decoded body for text content types, else None."""
        if not self.is_text():
            return None
        return self._materialize(
            'text', lambda: self.buffer().decode(self._charset(), errors='replace')
        )

    def json(self) -> Any:
        """Return the decoded JSON body for JSON content types, else None.

        Raises:
            DecodeError: If the content type claims JSON but the body is not valid JSON.
        """
        if not self.is_json():
            return None
        return self._materialize('json', self._decode_json)

    def _decode_json(self):
        data = self.buffer()
        try:
            return json.loads(data.decode(self._charset()))
        except (UnicodeDecodeError, LookupError, ValueError) as e:
            raise DecodeError(
                f"Invalid JSON body ({len(data)} bytes): {e}",
                content_type=self.content_type,
            ) from e

    def pagination(self) -> Dict[str, Any]:
        """Return paging metadata from the JSON payload, or {} when there is none."""
        payload = self.json()
        if not isinstance(payload, dict):
            return {}
        return PaginationInfo.from_payload(payload).model_dump()

    def __repr__(self):
        return f"<APIResponse [{self.status}]>"


def create_response(pending) -> APIResponse:
    """Wrap a raw response and gate the caller on its status.

    Args:
        pending: The raw response, or a ``concurrent.futures.Future`` resolving to one.

    Returns:
        The envelope, when the status is in [200, 300).

    Raises:
        HTTPError: For any other status, carrying the classified kind and the
            best-effort decoded text and JSON bodies.
    """
    if isinstance(pending, Future):
        pending = pending.result()

    response = APIResponse(pending)
    if response.ok:
        return response

    status_code = response.status if response.status is not None else 500
    # Drain every error body, decodable or not, so the connection is released
    response.buffer()
    text = response.text()
    try:
        body = response.json()
    except DecodeError as e:
        logger.debug(f"Error response body for HTTP {status_code} is not valid JSON: {e}")
        body = None

    error = HTTPError(
        response.reason or 'HTTP Error',
        status_code=status_code,
        kind=classify_status(status_code),
        text=text,
        json=body,
    )
    logger.debug(f"Request failed with HTTP {status_code} ({error.kind.value})")
    raise error
