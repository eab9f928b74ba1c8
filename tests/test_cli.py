"""Tests for the webversions command line."""

import json
import logging

import pytest

from args import parse_args
from constants import Constants, ExitCodes
from versioning.backends.base import VersionBackend
from versioning.backends.git import GitError, NoPatchVersionError
from webversions import main, render


class FakeBackend(VersionBackend):
    """In-memory backend keyed by repository dir."""

    def __init__(self, minors=None, patches=None, fail=False):
        self.minors = minors or []
        self.patches = patches or []
        self.fail = fail
        self.repository_dirs = []

    def _check(self, repository_dir):
        self.repository_dirs.append(repository_dir)
        if self.fail:
            raise GitError("git branch failed", ["git", "branch"], 128, "fatal")

    def get_all_minor_versions(self, repository_dir, read_local=None, read_remote=None):
        self._check(repository_dir)
        return list(self.minors)

    def get_last_stable_minor_version(self, repository_dir, read_local=None, read_remote=None):
        self._check(repository_dir)
        return self.minors[0] if self.minors else None

    def get_last_patch_version(self, repository_dir):
        self._check(repository_dir)
        return self.patches[0] if self.patches else None

    def get_last_patch_version_of(self, superior_version, repository_dir):
        self._check(repository_dir)
        for patch in self.patches:
            if patch.startswith(superior_version + "."):
                return patch
        raise NoPatchVersionError(superior_version, repository_dir)

    def get_all_patch_versions(self, repository_dir):
        self._check(repository_dir)
        return list(self.patches)


class WorkingCopyBackend(FakeBackend):
    """Fake backend that also knows the checked-out branch."""

    def __init__(self, current=None, **kwargs):
        super().__init__(**kwargs)
        self.current = current

    def get_current_branch(self, repository_dir):
        return self.current


@pytest.fixture(autouse=True)
def isolated_constants(monkeypatch):
    """Keep Constants changes made by main() inside each test."""
    for name in ("DEFAULT_UNSTABLE_VERSION", "GIT_BINARY", "GIT_TIMEOUT_SEC",
                 "INCLUDE_LOCAL_BRANCHES", "INCLUDE_REMOTE_BRANCHES"):
        monkeypatch.setattr(Constants, name, getattr(Constants, name))
    for env in (Constants.ENV_CONFIG, Constants.ENV_UNSTABLE_VERSION,
                Constants.ENV_GIT_BINARY, Constants.ENV_LOG_LEVEL):
        monkeypatch.delenv(env, raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def run_cli(argv, backend, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv, backend=backend)
    return excinfo.value.code, capsys.readouterr().out


class TestArgParsing:

    def test_defaults(self):
        ns = parse_args(["minor"])
        assert ns.action == "minor"
        assert ns.REPOSITORY_DIR == "."
        assert ns.UNSTABLE_VERSION is None
        assert ns.JSON is False

    def test_version_required(self):
        with pytest.raises(SystemExit):
            parse_args(["last-patch-of"])

    def test_unknown_action(self):
        with pytest.raises(SystemExit):
            parse_args(["bogus"])

    def test_options(self):
        ns = parse_args(["-C", "/srv/site", "-u", "mistress", "--no-remote", "has-minor", "1.0"])
        assert ns.REPOSITORY_DIR == "/srv/site"
        assert ns.UNSTABLE_VERSION == "mistress"
        assert ns.NO_REMOTE is True
        assert ns.version == "1.0"


class TestMain:

    def test_minor_catalogue(self, capsys):
        backend = FakeBackend(minors=["2.0", "1.1", "1.0"])
        code, out = run_cli(["-C", "repo", "-u", "mistress", "minor"], backend, capsys)
        assert code == ExitCodes.SUCCESS.value
        assert out.splitlines() == ["mistress", "2.0", "1.1", "1.0"]
        assert backend.repository_dirs == ["repo"]

    def test_patch_catalogue_as_json(self, capsys):
        backend = FakeBackend(patches=["2.0.5", "1.1.0"])
        code, out = run_cli(["--json", "patch"], backend, capsys)
        assert code == ExitCodes.SUCCESS.value
        assert json.loads(out) == ["main", "2.0.5", "1.1.0"]

    def test_last_patch_of(self, capsys):
        backend = FakeBackend(patches=["2.0.5", "1.1.14"])
        code, out = run_cli(["last-patch-of", "1.1"], backend, capsys)
        assert code == ExitCodes.SUCCESS.value
        assert out.strip() == "1.1.14"

    def test_last_patch_of_unstable(self, capsys):
        code, out = run_cli(["last-patch-of", "main"], FakeBackend(fail=True), capsys)
        assert code == ExitCodes.SUCCESS.value
        assert out.strip() == "main"

    def test_has_minor_false(self, capsys):
        code, out = run_cli(["has-minor", "nonsense"], FakeBackend(minors=["1.0"]), capsys)
        assert code == ExitCodes.NOT_FOUND.value
        assert out.strip() == "false"

    def test_last_minor_absent(self, capsys):
        code, out = run_cli(["last-minor"], FakeBackend(), capsys)
        assert code == ExitCodes.NOT_FOUND.value
        assert out == ""

    def test_stable_patch_empty_is_success(self, capsys):
        code, out = run_cli(["stable-patch"], FakeBackend(), capsys)
        assert code == ExitCodes.SUCCESS.value
        assert out == ""

    def test_current_branch_resolves(self, capsys):
        backend = WorkingCopyBackend(patches=["1.1.3"], current="1.1")
        code, out = run_cli(["current"], backend, capsys)
        assert code == ExitCodes.SUCCESS.value
        assert out.strip() == "1.1.3"

    def test_current_detached_head(self, capsys):
        backend = WorkingCopyBackend(current="(HEAD detached at c6a5ba1)", fail=True)
        code, out = run_cli(["current"], backend, capsys)
        assert code == ExitCodes.SUCCESS.value
        assert out.strip() == "(HEAD detached at c6a5ba1)"

    def test_current_without_working_copy_support(self, capsys):
        code, out = run_cli(["current"], FakeBackend(minors=["1.0"]), capsys)
        assert code == ExitCodes.NOT_FOUND.value
        assert out == ""

    def test_git_failure(self, capsys):
        code, out = run_cli(["stable-minor"], FakeBackend(fail=True), capsys)
        assert code == ExitCodes.GIT_ERROR.value
        assert out == ""

    def test_unknown_release_line(self, capsys):
        code, _ = run_cli(["last-patch-of", "9.9"], FakeBackend(patches=["1.0.0"]), capsys)
        assert code == ExitCodes.GIT_ERROR.value

    def test_unstable_from_config_file(self, capsys, tmp_path):
        config = tmp_path / "webversions.yml"
        config.write_text("unstable_version: develop\n")
        code, out = run_cli(["--config", str(config), "unstable"], FakeBackend(), capsys)
        assert code == ExitCodes.SUCCESS.value
        assert out.strip() == "develop"

    def test_cli_flag_beats_config(self, capsys, tmp_path):
        config = tmp_path / "webversions.yml"
        config.write_text("unstable_version: develop\n")
        code, out = run_cli(["--config", str(config), "-u", "trunk", "unstable"], FakeBackend(), capsys)
        assert out.strip() == "trunk"

    def test_no_remote_flag(self, capsys):
        run_cli(["--no-remote", "unstable"], FakeBackend(), capsys)
        assert Constants.INCLUDE_REMOTE_BRANCHES is False
        assert Constants.INCLUDE_LOCAL_BRANCHES is True


def test_render():
    assert render(None) == ""
    assert render(True) == "true"
    assert render(["a", "b"]) == "a\nb"
    assert render("1.0.0") == "1.0.0"
    assert render(None, as_json=True) == "null"
