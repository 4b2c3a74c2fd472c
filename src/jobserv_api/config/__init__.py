"""
Configuration for the JobServ API client: runtime settings and logging.
"""

from .logging import bootstrap_logging, get_logger
from .settings import (
    SettingNotDefinedException,
    SettingValueNotFoundException,
    clear_cache,
    get_setting,
    list_settings,
)

__all__ = [
    'bootstrap_logging',
    'get_logger',
    'get_setting',
    'list_settings',
    'clear_cache',
    'SettingNotDefinedException',
    'SettingValueNotFoundException',
]
