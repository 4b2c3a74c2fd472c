"""
JobServ API client.

Composes one ``Remote`` with every resource so they share the transport and
its connection pool.
"""
import logging
from typing import Optional

from .client.base_client import Fetcher
from .client.remote_client import Remote
from .config.settings import get_setting
from .resources import (
    Devices,
    Factories,
    FactoryResources,
    Health,
    LegacyDeviceGroups,
    LegacyDevices,
    Projects,
    Workers,
)

logger = logging.getLogger(__name__)


class JobServClient:
    """Entry point to the JobServ API.

    Example:
        client = JobServClient('https://api.foundries.io')
        response = client.devices.find_by_name('gateway-01')
        device = response.json()
    """

    def __init__(self, address: str, fetcher: Optional[Fetcher] = None,
                 user_agent: Optional[str] = None, content_type: Optional[str] = None):
        self.remote = Remote(address, fetcher=fetcher, user_agent=user_agent, content_type=content_type)

        self.devices = Devices(self.remote)
        self.factories = Factories(self.remote)
        self.projects = Projects(self.remote)
        self.health = Health(self.remote)
        self.workers = Workers(self.remote)
        self.legacy_devices = LegacyDevices(self.remote)
        self.legacy_device_groups = LegacyDeviceGroups(self.remote)
        # Resource-agnostic access rooted at '/'
        self.resources = FactoryResources(self.remote)

    @classmethod
    def from_settings(cls, fetcher: Optional[Fetcher] = None) -> 'JobServClient':
        """Build a client from the api-url, user-agent and content-type settings."""
        address = get_setting('api-url')
        logger.debug(f"Creating JobServ client for {address}")
        return cls(
            address,
            fetcher=fetcher,
            user_agent=get_setting('user-agent'),
            content_type=get_setting('content-type'),
        )

    def request(self, descriptor=None, base_path=None, **fields):
        """Issue a request described by a ``RequestDescriptor`` (or its fields)."""
        return self.remote.request(descriptor, base_path=base_path, **fields)
