"""OTA device endpoints."""
from .base import JobServ


class Devices(JobServ):
    """Devices registered with the OTA service."""

    BASE_PATH = '/ota/devices/'

    def find_by_name(self, device, **options):
        """Find a device by its name."""
        return self.find(f"{device}/", **options)

    def remove(self, device, **options):
        """Remove a device."""
        return super().remove(f"{device}/", **options)

    def update(self, device, data=None, body=None, **options):
        """Update a device; ``data`` is an alias for ``body``."""
        return super().update(f"{device}/", data=data, body=body, **options)

    def get_updates(self, device, **options):
        """Retrieve all updates of a device."""
        return self.find(f"{device}/updates/", **options)

    def get_update_events(self, device, correlation_id, **options):
        """Retrieve events that took place during the update."""
        return self.find(f"{device}/updates/{correlation_id}/", **options)

    def get_update_by_id(self, device, update, **options):
        return self.find(f"{device}/updates/{update}/", **options)

    def create_config(self, device, data=None, body=None, **options):
        """Create a config setting for a device."""
        return self.create(f"{device}/config/", data=data, body=body, **options)

    def get_config(self, device, **options):
        """Retrieve the list of config settings defined for a device."""
        return self.find(f"{device}/config/", **options)

    def update_config(self, device, data=None, body=None, **options):
        return super().update(f"{device}/config/", data=data, body=body, **options)

    def remove_config(self, device, config, **options):
        return super().remove(f"{device}/config/{config}/", **options)

    def get_apps_states(self, device, **options):
        """Retrieve the states of the apps running on a device."""
        return self.find(f"{device}/apps-states/", **options)
