"""Legacy LMP device endpoints.

Devices here are addressed per update stream; ``stream`` is sent as a query
parameter and omitted when None.
"""
from datetime import datetime, timedelta, timezone

from ..client.models import Verb
from .base import JobServ

OFFLINE_AFTER = timedelta(hours=1)


def _parse_timestamp(value):
    """Parse an ISO 8601 timestamp; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except (AttributeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_offline(device, now=None):
    """True unless the device's ``last-seen`` is less than an hour old.

    A missing or unparseable ``last-seen`` counts as offline.
    """
    last_seen = _parse_timestamp(device.get('last-seen'))
    if last_seen is None:
        return True
    now = now or datetime.now(timezone.utc)
    return now - last_seen >= OFFLINE_AFTER


def _with_stream(options, stream):
    query = dict(options.pop('query', None) or {})
    query['stream'] = stream
    options['query'] = query
    return options


class LegacyDevices(JobServ):
    """Devices of the legacy LMP device registry."""

    BASE_PATH = '/lmp/devices/'

    def find_by_name(self, device, **options):
        """Find a device by its name."""
        return self.find(f"{device}/", **options)

    def updates(self, device, **options):
        """Retrieve all updates of a device."""
        return self.find(f"{device}/updates/", **options)

    def request_update(self, device, hash, stream=None, **options):
        """Ask a device to update to the image with ``hash``."""
        return self._request(
            Verb.PUT, f"{device}/", {'image': {'hash': hash}}, **_with_stream(options, stream)
        )

    def remove(self, device, stream=None, **options):
        return super().remove(f"{device}/", **_with_stream(options, stream))

    def update(self, device, stream=None, data=None, body=None, **options):
        """Update a device; ``data`` is an alias for ``body``."""
        return super().update(f"{device}/", data=data, body=body, **_with_stream(options, stream))

    def offline(self, devices, now=None):
        """Return copies of ``devices`` with an ``offline`` flag set on each."""
        return [{**device, 'offline': is_offline(device, now)} for device in devices]

    def is_offline(self, device, now=None):
        return is_offline(device, now)
