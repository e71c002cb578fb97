"""Tests for the candidate providers."""

import pytest

from shellcomplete.collaborators import scan_directory
from shellcomplete.definitions import DefinitionStore, parse_definition
from shellcomplete.models import CommandArg, CommandName, EnvVar, FilePath, ProviderSource, ProviderUnavailable
from shellcomplete.providers import (
    BuiltinCommandProvider,
    CommandNameProvider,
    DefinitionTreeProvider,
    EnvVarProvider,
    MakeTargets,
    PathProvider,
    SshHosts,
    VoxEnvironments,
)
from shellcomplete.providers.path import split_path_prefix

PIP, _ = parse_definition("pip", [{"install": ["-U", "--upgrade", "-r", "--requirement"]}, "download", "uninstall"])


def texts(candidates):
    return [c.text for c in candidates]


def arg(command, *words, definition=None):
    return CommandArg(command, len(words), tuple(words), words[-1], definition)


def unavailable():
    raise ProviderUnavailable("nope")


# Definition trees


def test_tree_first_level(test_logger):
    provider = DefinitionTreeProvider(test_logger)
    assert texts(provider.complete(arg("pip", "ins", definition=PIP))) == ["install"]
    assert texts(provider.complete(arg("pip", "", definition=PIP))) == ["install", "download", "uninstall"]


def test_tree_second_level(test_logger):
    provider = DefinitionTreeProvider(test_logger)
    result = provider.complete(arg("pip", "install", "--re", definition=PIP))
    assert texts(result) == ["--requirement"]
    assert result[0].source is ProviderSource.DEFINITION


def test_tree_second_level_after_other_flags(test_logger):
    provider = DefinitionTreeProvider(test_logger)
    assert texts(provider.complete(arg("pip", "install", "-U", "--up", definition=PIP))) == ["--upgrade"]


def test_tree_unknown_entry(test_logger):
    provider = DefinitionTreeProvider(test_logger)
    assert provider.complete(arg("pip", "freeze", "-", definition=PIP)) == []
    assert provider.complete(arg("pip", "download", "", definition=PIP)) == []


def test_tree_without_definition(test_logger):
    assert DefinitionTreeProvider(test_logger).complete(arg("pip", "ins")) == []


def test_tree_handles_only_command_args(test_logger):
    provider = DefinitionTreeProvider(test_logger)
    assert provider.handles(arg("pip", "x"))
    assert not provider.handles(FilePath("x"))
    assert not provider.handles(CommandName("x"))


# Environment variables


def test_envvar(test_logger):
    provider = EnvVarProvider(lambda: {"LC_ALL": "C", "LC_CTYPE": "x", "LANG": "y", "lc_lower": "z"}, log=test_logger)
    assert texts(provider.complete(EnvVar("$LC_", "LC_"))) == ["$LC_ALL", "$LC_CTYPE"]


def test_envvar_braced(test_logger):
    provider = EnvVarProvider(lambda: {"HOME": "/root", "HOSTNAME": "box"}, log=test_logger)
    assert texts(provider.complete(EnvVar("${HO", "HO", braced=True))) == ["${HOME}", "${HOSTNAME}"]


def test_envvar_all_names(test_logger):
    provider = EnvVarProvider(lambda: {"B": "", "A": ""}, log=test_logger)
    assert texts(provider.complete(EnvVar("$", ""))) == ["$A", "$B"]


def test_envvar_shell_variables(test_logger):
    provider = EnvVarProvider(lambda: {"HOME": "/root"}, {"HISTSIZE": "100", "HOME": "x"}, log=test_logger)
    assert texts(provider.complete(EnvVar("$H", "H"))) == ["$HISTSIZE", "$HOME"]


# Paths


@pytest.mark.parametrize(
    ("prefix", "expected"),
    [
        ("", ("", "")),
        ("ma", ("", "ma")),
        ("src/ma", ("src/", "ma")),
        ("src/", ("src/", "")),
        ("/", ("/", "")),
        ("~", ("~/", "")),
        ("~/Doc", ("~/", "Doc")),
        ("../a/b", ("../a/", "b")),
    ],
)
def test_split_path_prefix(prefix, expected):
    assert split_path_prefix(prefix) == expected


def test_path_current_directory(workdir, test_logger):
    provider = PathProvider(scan_directory, log=test_logger)
    assert sorted(texts(provider.complete(FilePath("ba")))) == ["ba", "bar/", "baz"]


def test_path_subdirectory(workdir, test_logger):
    provider = PathProvider(scan_directory, log=test_logger)
    assert sorted(texts(provider.complete(FilePath("src/")))) == ["src/main.py", "src/utils/"]
    assert texts(provider.complete(FilePath("src/ut"))) == ["src/utils/"]


def test_path_hidden_entries(workdir, test_logger):
    provider = PathProvider(scan_directory, log=test_logger)
    assert ".hidden" not in texts(provider.complete(FilePath("")))
    assert texts(provider.complete(FilePath(".h"))) == [".hidden"]
    shown = PathProvider(scan_directory, show_hidden=True, log=test_logger)
    assert ".hidden" in texts(shown.complete(FilePath("")))


def test_path_home(workdir, monkeypatch, test_logger):
    monkeypatch.setenv("HOME", str(workdir / "src"))
    provider = PathProvider(scan_directory, log=test_logger)
    assert sorted(texts(provider.complete(FilePath("~/")))) == ["~/main.py", "~/utils/"]
    assert sorted(texts(provider.complete(FilePath("~")))) == ["~/main.py", "~/utils/"]


def test_path_missing_directory(workdir, test_logger):
    provider = PathProvider(scan_directory, log=test_logger)
    assert provider.complete(FilePath("nowhere/x")) == []


def test_path_listing_errors(test_logger):
    def broken(path):
        raise PermissionError(path)

    assert PathProvider(broken, log=test_logger).complete(FilePath("x")) == []


def test_path_max_entries(mocker, test_logger):
    listing = mocker.Mock(return_value=iter([(f"f{i}", False) for i in range(10)]))
    provider = PathProvider(listing, max_entries=3, log=test_logger)
    assert texts(provider.complete(FilePath(""))) == ["f0", "f1", "f2"]
    listing.assert_called_once_with(".")


def test_path_negative_max_entries_reads_nothing(mocker, test_logger):
    listing = mocker.Mock(return_value=iter([("f0", False)]))
    provider = PathProvider(listing, max_entries=-1, log=test_logger)
    assert provider.max_entries == 0
    assert provider.complete(FilePath("")) == []


def test_path_absolute(mocker, test_logger):
    listing = mocker.Mock(return_value=[("etc", True), ("usr", True), ("vmlinuz", False)])
    provider = PathProvider(listing, log=test_logger)
    assert texts(provider.complete(FilePath("/e"))) == ["/etc/"]
    listing.assert_called_once_with("/")


# Builtin commands


def test_make_targets():
    make = MakeTargets(lambda: ["all", "clean"])
    assert make(CommandArg("make", 1, ("",), "")) == ["all", "clean"]
    assert make(CommandArg("make", 1, ("-",), "-")) == []
    assert make(CommandArg("make", 2, ("-f", ""), "")) == []
    assert make(CommandArg("make", 3, ("-f", "Makefile", ""), "")) == ["all", "clean"]


def test_ssh_hosts():
    ssh = SshHosts(lambda: ["web1", "db"])
    assert ssh(CommandArg("ssh", 1, ("w",), "w")) == ["web1", "db"]
    assert ssh(CommandArg("ssh", 1, ("root@w",), "root@w")) == ["root@web1", "root@db"]
    assert ssh(CommandArg("ssh", 2, ("-i", ""), "")) == []


def test_vox_environments():
    vox = VoxEnvironments(lambda: ["py311", "tools"])
    assert vox(CommandArg("vox", 2, ("activate", ""), "")) == ["py311", "tools"]
    assert vox(CommandArg("vox", 2, ("rm", "p"), "p")) == ["py311", "tools"]
    assert vox(CommandArg("vox", 1, ("act",), "act")) == []
    assert vox(CommandArg("vox", 2, ("create", ""), "")) == []


def test_builtin_dispatch(test_logger):
    provider = BuiltinCommandProvider({"make": MakeTargets(lambda: ["all", "build", "clean"])}, test_logger)
    result = provider.complete(CommandArg("make", 1, ("b",), "b"))
    assert texts(result) == ["build"]
    assert result[0].source is ProviderSource.BUILTIN
    assert provider.complete(CommandArg("pip", 1, ("b",), "b")) == []


def test_builtin_register(test_logger):
    provider = BuiltinCommandProvider(log=test_logger)
    provider.register("kill", lambda context: ["1234", "5678"])
    assert texts(provider.complete(CommandArg("kill", 1, ("12",), "12"))) == ["1234"]


def test_builtin_collaborator_failure(test_logger):
    """An unavailable source degrades to no candidates."""
    provider = BuiltinCommandProvider({"ssh": SshHosts(unavailable)}, test_logger)
    assert provider.complete(CommandArg("ssh", 1, ("",), "")) == []


# Command names


def test_command_names(definitions_dir, test_logger):
    store = DefinitionStore(test_logger)
    store.reload_user(definitions_dir)
    provider = CommandNameProvider(store, lambda: ["pip", "pip3", "python3"], {"pl": "pip list"}, test_logger)
    assert texts(provider.complete(CommandName("p"))) == ["pl", "pip", "pip", "pip3", "python3"]
    assert texts(provider.complete(CommandName("b"))) == ["brew"]


def test_command_names_without_executables(test_logger):
    provider = CommandNameProvider(DefinitionStore(test_logger), unavailable, log=test_logger)
    assert provider.complete(CommandName("x")) == []
