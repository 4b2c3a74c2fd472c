"""
Base fetcher abstract class.

A fetcher performs exactly one network call for a built URL and request
options, and returns the raw response without interpreting its status.
"""
from abc import ABC, abstractmethod
from typing import Any, Mapping


class Fetcher(ABC):
    """Abstract base class for low-level network call implementations.

    ``options`` always carries ``method``, ``headers`` and ``body`` (None when
    the request has no payload). The returned object must expose a status
    (``status_code`` or ``status``), ``headers`` and the body.
    """

    @abstractmethod
    def __call__(self, url: str, options: Mapping[str, Any]):
        """Perform the request and return the raw response."""
        pass
