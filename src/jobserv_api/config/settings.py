"""
Runtime Settings Management

Provides runtime access to client configuration via get_setting(name).
Uses a manifest-driven approach: each setting lists its sources (environment
variables, then jobserv.yaml in the working directory) and an optional default.
"""
import os
import sys
import logging
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List
from dataclasses import dataclass

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

APP_CONFIG_FILENAME = 'jobserv.yaml'


class SettingNotDefinedException(ConfigurationError):
    """Raised when a setting name is not defined in the manifest."""

    def __init__(self, setting_name: str, available_settings: List[str]):
        self.available_settings = available_settings
        super().__init__(
            f"Setting '{setting_name}' is not defined in the settings manifest. "
            f"Available settings: {', '.join(sorted(available_settings))}",
            setting_name=setting_name,
        )


class SettingValueNotFoundException(ConfigurationError):
    """Raised when a required setting is defined but no source has a value."""

    def __init__(self, setting_name: str, source: str, details: str = ""):
        self.details = details
        message = f"Setting '{setting_name}' is defined but value not found from source '{source}'"
        if details:
            message += f": {details}"
        super().__init__(message, setting_name=setting_name, source=source)


@dataclass
class SettingDefinition:
    """Definition of a runtime setting from the manifest."""
    name: str
    sources: List[str]
    description: str = ''
    required: bool = True
    default: Optional[str] = None


# Global cache for settings manifest and values
_settings_manifest: Optional[List[SettingDefinition]] = None
_settings_cache: Dict[str, Any] = {}
_app_config_cache: Optional[Dict[str, Any]] = None


def _load_settings_manifest() -> List[SettingDefinition]:
    """Load and cache the settings manifest from YAML."""
    global _settings_manifest

    if _settings_manifest is not None:
        return _settings_manifest

    manifest_path = Path(__file__).parent / "settings_manifest.yaml"

    with open(manifest_path, 'r') as f:
        manifest_data = yaml.safe_load(f)

    if not isinstance(manifest_data, dict) or 'settings' not in manifest_data:
        raise ConfigurationError(f"Invalid manifest format in {manifest_path}: missing 'settings' key")

    _settings_manifest = [
        SettingDefinition(
            name=setting_data['name'],
            sources=list(setting_data.get('sources', [])),
            description=setting_data.get('description', ''),
            required=setting_data.get('required', True),
            default=setting_data.get('default'),
        )
        for setting_data in manifest_data['settings']
    ]
    logger.debug(f"Loaded {len(_settings_manifest)} settings from manifest")
    return _settings_manifest


def _load_app_config() -> Dict[str, Any]:
    """Load and cache jobserv.yaml from the current working directory."""
    global _app_config_cache

    if _app_config_cache is not None:
        return _app_config_cache

    app_config_path = Path.cwd() / APP_CONFIG_FILENAME

    if not app_config_path.exists():
        logger.debug(f"{APP_CONFIG_FILENAME} not found at {app_config_path}")
        _app_config_cache = {}
        return _app_config_cache

    try:
        with open(app_config_path, 'r') as f:
            config_data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse {app_config_path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"{app_config_path} must contain a dictionary")

    _app_config_cache = config_data
    logger.debug(f"Loaded app config from {app_config_path}")
    return _app_config_cache


def _get_nested_value(data: Dict[str, Any], path: str) -> Any:
    """Get a nested value from a dictionary using dot notation."""
    current = data
    for key in path.split('.'):
        if not isinstance(current, dict) or key not in current:
            raise KeyError(f"Path '{path}' not found")
        current = current[key]
    return current


def _read_source(source: str) -> Optional[Any]:
    """Read one source; None when it has no value."""
    source_type, source_param = source.split(':', 1)

    if source_type == 'env-var':
        value = os.environ.get(source_param)
        if value is None or not value.strip():
            return None
        return value.strip()

    elif source_type == 'app-config':
        try:
            return _get_nested_value(_load_app_config(), source_param)
        except KeyError:
            return None

    else:
        raise ConfigurationError(f"Unknown source type '{source_type}' in '{source}'")


def _load_setting_value(setting: SettingDefinition) -> Any:
    """Load a setting value from the first source that has one."""
    for source in setting.sources:
        value = _read_source(source)
        if value is not None:
            logger.debug(f"Setting '{setting.name}' loaded from {source}")
            return value

    if setting.default is not None:
        return setting.default

    if setting.required:
        raise SettingValueNotFoundException(
            setting.name,
            setting.sources[0] if setting.sources else 'none',
            f"checked {', '.join(setting.sources)}",
        )
    return None


def get_setting(name: str) -> Any:
    """
    Get a setting value by name.

    Args:
        name: The setting name (e.g., 'api-url', 'user-agent')

    Returns:
        The setting value, or None for an optional setting without a value

    Raises:
        SettingNotDefinedException: If the setting name is not in the manifest
        SettingValueNotFoundException: If a required setting has no value
    """
    if name in _settings_cache:
        return _settings_cache[name]

    manifest = _load_settings_manifest()

    setting_def = next((s for s in manifest if s.name == name), None)
    if setting_def is None:
        raise SettingNotDefinedException(name, [s.name for s in manifest])

    value = _load_setting_value(setting_def)
    _settings_cache[name] = value
    return value


def list_settings() -> List[Dict[str, Any]]:
    """
    List all available settings with their metadata.

    Returns:
        List of setting information dictionaries
    """
    settings_info = []

    for setting in _load_settings_manifest():
        try:
            value = get_setting(setting.name)
        except ConfigurationError as e:
            value = f"<ERROR: {e}>"

        settings_info.append({
            'name': setting.name,
            'value': value,
            'sources': setting.sources,
            'description': setting.description,
            'required': setting.required,
        })

    return settings_info


def print_settings_table(file=None):
    """Print a formatted table of settings to stderr (or specified file)."""
    if file is None:
        file = sys.stderr

    print("\n" + "=" * 85, file=file)
    print("🔧 CLIENT SETTINGS", file=file)
    print("=" * 85, file=file)
    print(f"{'SETTING':<25} {'VALUE':<59}", file=file)
    print("-" * 85, file=file)

    for setting in list_settings():
        display_value = str(setting['value']) if setting['value'] is not None else "<NOT SET>"
        if len(display_value) > 59:
            display_value = display_value[:56] + "..."
        print(f"{setting['name']:<25} {display_value:<59}", file=file)

    print("=" * 85, file=file)


def clear_cache():
    """Clear all cached settings and manifest data. Useful for testing."""
    global _settings_manifest, _settings_cache, _app_config_cache
    _settings_manifest = None
    _settings_cache.clear()
    _app_config_cache = None
