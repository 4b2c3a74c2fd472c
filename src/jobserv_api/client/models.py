"""Pydantic models for request descriptors and pagination metadata."""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class Verb(str, Enum):
    """HTTP verbs accepted by the transport."""
    GET = 'GET'
    POST = 'POST'
    PUT = 'PUT'
    PATCH = 'PATCH'
    DELETE = 'DELETE'
    HEAD = 'HEAD'
    OPTIONS = 'OPTIONS'


# Verbs allowed to carry a request body
PAYLOAD_VERBS = frozenset({Verb.POST, Verb.PUT, Verb.PATCH, Verb.DELETE})

QueryValue = Union[str, int, float, bool, List[Union[str, int, float, bool]]]


def has_body(body: Any) -> bool:
    """Return True when ``body`` should be sent; None and empty str/bytes are no body."""
    if body is None:
        return False
    if isinstance(body, (str, bytes, bytearray, memoryview)):
        return len(body) > 0
    return True


class RequestDescriptor(BaseModel):
    """Description of one outgoing request.

    ``path`` is relative to the owning resource's base path. ``transport_override``
    replaces the default fetcher for this call only.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    path: Optional[str] = None
    query: Optional[Dict[str, Optional[QueryValue]]] = None
    body: Any = None
    verb: Verb = Verb.GET
    headers: Optional[Dict[str, str]] = None
    transport_override: Optional[Callable[..., Any]] = None

    @field_validator('verb', mode='before')
    @classmethod
    def _normalise_verb(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value

    @model_validator(mode='after')
    def _check_body_allowed(self):
        if has_body(self.body) and self.verb not in PAYLOAD_VERBS:
            raise ValueError(f"{self.verb.value} requests cannot carry a body")
        return self


class PaginationInfo(BaseModel):
    """Paging metadata derived from a JSON payload."""
    total: Optional[int] = None
    limit: Optional[int] = None
    pages: Optional[int] = None
    current: Optional[int] = None
    next: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'PaginationInfo':
        """Build from a payload, nested under ``data`` or flat.

        The builds API nests paging fields under ``data`` while the devices
        API returns them at the top level; both shapes are accepted.
        """
        data = payload.get('data')
        if not isinstance(data, dict):
            data = payload

        current = data.get('page')
        pages = data.get('pages')
        next_page = None
        if current is not None and pages is not None and int(current) + 1 <= int(pages):
            next_page = int(current) + 1

        return cls(
            total=data.get('total'),
            limit=data.get('limit'),
            pages=pages,
            current=current,
            next=next_page,
        )
