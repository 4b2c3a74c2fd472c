"""
Exception classes for the JobServ API client.

HTTP failures are classified into a fixed taxonomy keyed by status code.
Transport failures (DNS, refused connections, socket timeouts) are never
wrapped here; they reach the caller as raised by the fetcher.
"""
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Classification of a non-2xx HTTP response."""
    BAD_REQUEST = 'bad_request'
    UNAUTHORIZED = 'unauthorized'
    FORBIDDEN = 'forbidden'
    NOT_FOUND = 'not_found'
    NOT_ALLOWED = 'not_allowed'
    NOT_ACCEPTABLE = 'not_acceptable'
    REQUEST_TIMEOUT = 'request_timeout'
    GONE = 'gone'
    SERVER_ERROR = 'server_error'
    NOT_IMPLEMENTED = 'not_implemented'
    SERVICE_UNAVAILABLE = 'service_unavailable'
    TIMEOUT = 'timeout'
    UNKNOWN = 'unknown'


STATUS_KINDS = {
    400: ErrorKind.BAD_REQUEST,
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
    405: ErrorKind.NOT_ALLOWED,
    406: ErrorKind.NOT_ACCEPTABLE,
    408: ErrorKind.REQUEST_TIMEOUT,
    410: ErrorKind.GONE,
    500: ErrorKind.SERVER_ERROR,
    501: ErrorKind.NOT_IMPLEMENTED,
    503: ErrorKind.SERVICE_UNAVAILABLE,
    504: ErrorKind.TIMEOUT,
}


def classify_status(status_code: int) -> ErrorKind:
    """Look up the error kind for a status code; unmapped codes are UNKNOWN."""
    return STATUS_KINDS.get(status_code, ErrorKind.UNKNOWN)


class JobServError(Exception):
    """Base exception for all errors raised by this library."""
    def __init__(self, message: str, error_type: str = None):
        super().__init__(message)
        self.error_type = error_type
        self.guidance = self._generate_guidance()

    def _generate_guidance(self):
        """Override in subclasses to provide specific guidance."""
        return f"""
❌ JobServ API error: {self}
💡 Check the request and try again
"""


class HTTPError(JobServError):
    """Raised when the service answers with a status outside [200, 300).

    Carries the status code, its classification and the best-effort decoded
    body (``text`` and ``json``) for diagnostics. Instances are read-only
    once constructed.
    """
    def __init__(self, message: str, status_code: int, kind: ErrorKind = None,
                 text: Optional[str] = None, json: Any = None):
        self.status_code = status_code
        self.kind = kind if kind is not None else classify_status(status_code)
        self.text = text
        self.json = json
        super().__init__(message, error_type=self.kind.value)
        self._frozen = True

    def __setattr__(self, name, value):
        # Dunder attributes are managed by the interpreter (tracebacks, notes).
        if getattr(self, '_frozen', False) and not name.startswith('__'):
            raise AttributeError(f"{type(self).__name__} is immutable; cannot set '{name}'")
        super().__setattr__(name, value)

    def __delattr__(self, name):
        if getattr(self, '_frozen', False) and not name.startswith('__'):
            raise AttributeError(f"{type(self).__name__} is immutable; cannot delete '{name}'")
        super().__delattr__(name)

    def __reduce__(self):
        return (type(self), (self.args[0] if self.args else '', self.status_code,
                             self.kind, self.text, self.json))

    @property
    def status(self) -> int:
        return self.status_code

    def __repr__(self):
        return f"{type(self).__name__}(status_code={self.status_code}, kind='{self.kind.value}', message={str(self)!r})"

    def _generate_guidance(self):
        hints = {
            ErrorKind.UNAUTHORIZED: "Provide valid credentials in the request headers",
            ErrorKind.FORBIDDEN: "The credentials used are not allowed to access this resource",
            ErrorKind.NOT_FOUND: "Check the resource path and identifiers",
            ErrorKind.SERVICE_UNAVAILABLE: "The service is temporarily unavailable; retry later",
        }
        hint = hints.get(self.kind, "Inspect the response body attached to this error")
        return f"""
❌ HTTP {self.status_code} ({self.kind.value}): {self}
💡 {hint}
"""


class DecodeError(JobServError, ValueError):
    """Raised when a body whose content type claims JSON cannot be decoded."""
    def __init__(self, message: str, content_type: str = None):
        self.content_type = content_type
        super().__init__(message, error_type="decode_error")

    def _generate_guidance(self):
        return f"""
❌ Response body could not be decoded: {self}
💡 The server declared '{self.content_type}' but sent a body that does not match it
"""


class ConfigurationError(JobServError):
    """Raised when client settings are missing or invalid."""
    def __init__(self, message: str, setting_name: str = None, source: str = None):
        self.setting_name = setting_name
        self.source = source
        super().__init__(message, error_type="configuration")

    def _generate_guidance(self):
        if self.source and self.source.startswith('env-var:'):
            variable = self.source.split(':', 1)[1]
            return f"""
❌ Setting '{self.setting_name}' is not configured
💡 Resolve this in one of the following ways:
   1. Set the environment variable: export {variable}=<value>
   2. Or add it to jobserv.yaml in the current directory
"""
        return f"""
❌ Configuration error: {self}
💡 Check jobserv.yaml and the JOBSERV_* environment variables
"""
