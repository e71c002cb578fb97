" generic fixtures "
import logging

import pytest

from shellcomplete.collaborators import Collaborators, scan_directory
from shellcomplete.config import Configuration
from shellcomplete.engine import CompletionEngine
from shellcomplete.validation import ENGINE_SCHEMA

PIP_YAML = """\
- install:
    - -U
    - --upgrade
    - -r
    - --requirement
- download
- uninstall
- search
- wheel
"""

BREW_YAML = """\
install: [--cask, --force]
uninstall:
update:
upgrade: [--greedy]
untap:
list:
"""

ENVIRONMENT = {
    "HOME": "/home/user",
    "LANG": "en_US.UTF-8",
    "LC_ALL": "C",
    "LC_CTYPE": "en_US.UTF-8",
    "PATH": "/usr/bin",
}


def pytest_configure():
    "Runs once before all"
    from shellcomplete.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_logger():
    "A logger for the objects needing one"
    from shellcomplete.logging_setup import get_logger

    return get_logger("tests", level=logging.DEBUG)


@pytest.fixture
def definitions_dir(tmp_path):
    "A completers directory holding pip and brew definitions"
    directory = tmp_path / "completers"
    directory.mkdir()
    (directory / "pip.yaml").write_text(PIP_YAML)
    (directory / "brew.yaml").write_text(BREW_YAML)
    return directory


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    "A current directory with a few files and folders"
    cwd = tmp_path / "work"
    cwd.mkdir()
    (cwd / "bar").mkdir()
    (cwd / "ba").write_text("")
    (cwd / "baz").write_text("")
    (cwd / "src").mkdir()
    (cwd / "src" / "main.py").write_text("")
    (cwd / "src" / "utils").mkdir()
    (cwd / ".hidden").write_text("")
    monkeypatch.chdir(cwd)
    return cwd


@pytest.fixture
def collaborators():
    "Collaborators that never touch the real system, except the filesystem"
    return Collaborators(
        make_targets=lambda: ["all", "build", "clean", "install"],
        ssh_hosts=lambda: ["db.example.com", "web1", "web2"],
        vox_envs=lambda: ["py311", "py312", "tools"],
        environment=lambda: ENVIRONMENT,
        list_directory=scan_directory,
        executables=lambda: ["ls", "make", "pip", "pip3", "python3"],
    )


@pytest.fixture
def make_engine(definitions_dir, collaborators, test_logger):
    "Build an engine on the test definitions, with optional config overrides"

    def _make(**overrides):
        settings = {"definitions_dir": str(definitions_dir), "reload": "explicit"}
        settings.update(overrides)
        config = Configuration(settings, logger=test_logger, schema=ENGINE_SCHEMA)
        return CompletionEngine(config, collaborators=collaborators, log=test_logger)

    return _make


@pytest.fixture
def engine(make_engine, workdir):
    "An engine running in the work directory"
    return make_engine()
