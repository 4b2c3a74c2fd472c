"""Legacy LMP device group endpoints."""
from .base import JobServ


class LegacyDeviceGroups(JobServ):
    """Device groups of the legacy LMP device registry."""

    BASE_PATH = '/lmp/'

    def list(self, **options):
        """List all device groups (GET /lmp/device-groups, no trailing slash)."""
        return self.find('device-groups', **options)
