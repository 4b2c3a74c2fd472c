"""CI project endpoints: builds, runs and tests."""
from .base import JobServ


class Projects(JobServ):
    """Projects and their builds, runs and tests."""

    BASE_PATH = '/projects/'

    def find_builds(self, project, **options):
        """Retrieve the builds of a project."""
        return self.find(f"{project}/builds/", **options)

    def find_build_by_id(self, project, build, **options):
        return self.find(f"{project}/builds/{build}/", **options)

    def find_runs(self, project, build, **options):
        """Retrieve the runs of a build."""
        return self.find(f"{project}/builds/{build}/runs/", **options)

    def find_run_by_name(self, project, build, run, **options):
        return self.find(f"{project}/builds/{build}/runs/{run}/", **options)

    def cancel_run(self, project, build, run, **options):
        """Cancel a run that is queued or in progress."""
        return self.create(f"{project}/builds/{build}/runs/{run}/cancel", **options)

    def run_again(self, project, build, run, **options):
        """Re-queue a completed run."""
        return self.create(f"{project}/builds/{build}/runs/{run}/rerun", **options)

    def retrieve_simulator(self, project, build, run, **options):
        """Retrieve the script that reproduces a run locally."""
        return self.find(f"{project}/builds/{build}/runs/{run}/.simulate.sh", **options)

    def find_run_history(self, project, run, **options):
        return self.find(f"{project}/history/{run}/", **options)

    def find_tests(self, project, build, run, **options):
        return self.find(f"{project}/builds/{build}/runs/{run}/tests/", **options)

    def find_test_by_name(self, project, build, run, test, **options):
        return self.find(f"{project}/builds/{build}/runs/{run}/tests/{test}/", **options)
