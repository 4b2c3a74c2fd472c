"""
OTA factory endpoints.

All resources here share the ``/ota/factories/`` base path and take the
factory name as their first argument.
"""
import re

from .base import JobServ

_LMP_RUN = re.compile(r'lmp-[a-zA-Z0-9-]*?\d+$')


def create_target_name(run, target):
    """Return the TUF target name for a build run.

    Target names are ``<run>-lmp-<target>``, unless ``run`` already is a full
    target name that contains ``target``.

    >>> create_target_name('raspberrypi4-64', '42')
    'raspberrypi4-64-lmp-42'
    >>> create_target_name('raspberrypi4-64-lmp-42', '42')
    'raspberrypi4-64-lmp-42'
    """
    run, target = str(run), str(target)
    if _LMP_RUN.search(run) and re.search(re.escape(target), run, re.IGNORECASE):
        return run
    return f"{run}-lmp-{target}"


class _FactoryResource(JobServ):
    BASE_PATH = '/ota/factories/'


class Waves(_FactoryResource):
    """Update waves rolled out to a factory's devices."""

    resource_path = 'waves'

    def list(self, factory, **options):
        """List all waves for a factory."""
        return self.find(f"{factory}/{self.resource_path}/", **options)

    def retrieve(self, factory, wave, **options):
        return self.find(f"{factory}/{self.resource_path}/{wave}/", **options)

    def status(self, factory, wave, **options):
        return self.find(f"{factory}/{self.resource_path}/{wave}/status/", **options)

    def cancel(self, factory, wave, **options):
        return self.create(f"{factory}/{self.resource_path}/{wave}/cancel/", **options)

    def complete(self, factory, wave, **options):
        return self.create(f"{factory}/{self.resource_path}/{wave}/complete/", **options)

    def rollout(self, factory, wave, data=None, body=None, **options):
        """Roll a wave out to a group or a list of devices."""
        return self.create(f"{factory}/{self.resource_path}/{wave}/rollout/", data=data, body=body, **options)


class DeviceGroups(_FactoryResource):
    """Device groups of a factory."""

    def list(self, factory, **options):
        return self.find(f"{factory}/device-groups/", **options)

    def create(self, factory, data=None, body=None, **options):
        return super().create(f"{factory}/device-groups/", data=data, body=body, **options)

    def update(self, factory, group, data=None, body=None, **options):
        return super().update(f"{factory}/device-groups/{group}/", data=data, body=body, **options)

    def remove(self, factory, group, **options):
        return super().remove(f"{factory}/device-groups/{group}/", **options)


class ComposeApps(_FactoryResource):
    """Compose apps bundled in a target."""

    def list(self, factory, run, target, **options):
        return self.find(f"{factory}/targets/{create_target_name(run, target)}/compose-apps/", **options)

    def retrieve(self, factory, run, target, app, **options):
        return self.find(f"{factory}/targets/{create_target_name(run, target)}/compose-apps/{app}/", **options)


class Sboms(_FactoryResource):
    """Software bills of materials of a target.

    The target is named either directly through ``tuf_target`` or from
    ``run`` and ``target``.
    """

    def _target(self, tuf_target, run, target):
        return tuf_target or create_target_name(run, target)

    def list(self, factory, tuf_target=None, run=None, target=None, **options):
        return self.find(f"{factory}/targets/{self._target(tuf_target, run, target)}/sboms/", **options)

    def retrieve(self, factory, sbom_path, tuf_target=None, run=None, target=None, **options):
        """Retrieve the SPDX packages of one SBOM."""
        return self.find(f"{factory}/targets/{self._target(tuf_target, run, target)}/sboms/{sbom_path}", **options)


class Targets(_FactoryResource):
    """TUF targets of a factory."""

    def list(self, factory, **options):
        return self.find(f"{factory}/targets/", **options)

    def retrieve(self, factory, run, target, **options):
        return self.find(f"{factory}/targets/{create_target_name(run, target)}/", **options)


class Factories(_FactoryResource):
    """Factories, with their targets, device groups and waves attached."""

    def __init__(self, remote, base_path=None):
        super().__init__(remote, base_path)
        self.targets = Targets(remote)
        self.device_groups = DeviceGroups(remote)
        self.waves = Waves(remote)
        self.compose_apps = ComposeApps(remote)
        self.sboms = Sboms(remote)

    def prod_targets(self, factory, **options):
        """Retrieve a factory's production targets."""
        return self.find(f"{factory}/prod-targets/", **options)

    def status(self, factory, **options):
        return self.find(f"{factory}/status/", **options)
