"""
JobServ resources.

Each resource holds its endpoint templates and issues requests through a
shared ``Remote``.
"""

from .base import JobServ
from .devices import Devices
from .factories import (
    ComposeApps,
    DeviceGroups,
    Factories,
    Sboms,
    Targets,
    Waves,
    create_target_name,
)
from .factory_resources import FactoryResources
from .health import Health
from .legacy_device_groups import LegacyDeviceGroups
from .legacy_devices import LegacyDevices, is_offline
from .projects import Projects
from .workers import Workers

__all__ = [
    'JobServ',
    'Devices',
    'Factories',
    'FactoryResources',
    'Targets',
    'Waves',
    'DeviceGroups',
    'ComposeApps',
    'Sboms',
    'Health',
    'LegacyDevices',
    'LegacyDeviceGroups',
    'Projects',
    'Workers',
    'create_target_name',
    'is_offline',
]
