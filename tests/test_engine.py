"""End to end tests of the completion engine."""

import pytest

from shellcomplete.collaborators import Collaborators
from shellcomplete.engine import CompletionEngine
from shellcomplete.models import CommandArg, CommandName, ContextKind, EnvVar, FilePath

LINES = [
    "",
    "p",
    "pip ",
    "pip ins",
    "pip install --re",
    "pip install ",
    "brew u",
    "echo $LC_",
    "echo ${LA",
    "foo ba",
    "cat src/",
    'cat "sr',
    "make ",
    "make b",
    "ssh root@we",
    "vox activate py",
    "vox cr",
    "unknown_cmd ",
]


def test_first_level_argument(engine):
    result = engine.complete("pip ins")
    assert result.context == CommandArg("pip", 1, ("ins",), "ins")
    assert result.candidates == ["install"]
    assert not result.fallback


def test_second_level_argument(engine):
    result = engine.complete("pip install --re")
    assert result.context == CommandArg("pip", 2, ("install", "--re"), "--re")
    assert result.candidates == ["--requirement"]


def test_environment_variable(engine):
    result = engine.complete("echo $LC_")
    assert result.context == EnvVar("$LC_", "LC_")
    assert result.candidates == ["$LC_ALL", "$LC_CTYPE"]


def test_environment_variable_from_the_process(engine, monkeypatch):
    monkeypatch.setenv("SHELLCOMPLETE_TEST_VAR", "1")
    real = CompletionEngine(engine.config, Collaborators(), log=engine.log)
    assert real.resolve_completions("echo $SHELLCOMPLETE_TEST_") == ["$SHELLCOMPLETE_TEST_VAR"]


def test_braced_variable(engine):
    assert engine.resolve_completions("echo ${LA") == ["${LANG}"]


def test_malformed_definition_does_not_break_others(definitions_dir, make_engine, workdir):
    (definitions_dir / "pip.yaml").write_text("install: [unclosed")
    engine = make_engine()
    report = engine.reload()
    assert [path.name for path, _ in report.errors] == ["pip.yaml"]
    assert engine.resolve_completions("brew u") == ["uninstall", "untap", "update", "upgrade"]
    assert "pip" not in engine.store


def test_path_fallback_for_unknown_command(engine):
    result = engine.complete("foo ba")
    assert result.context == FilePath("ba")
    assert result.candidates == ["bar/", "ba", "baz"]


def test_path_fallback_when_tree_has_nothing(engine):
    """An argument the tree does not know completes as a path."""
    result = engine.complete("pip install src/")
    assert result.fallback
    assert result.context.kind is ContextKind.PATH
    assert result.candidates == ["src/utils/", "src/main.py"]


def test_command_name(engine):
    result = engine.complete("p")
    assert result.context == CommandName("p")
    assert result.candidates == ["pip", "pip3", "python3"]


def test_command_name_fallback_to_path(engine):
    assert engine.resolve_completions("./sr") == ["./src/"]
    assert engine.resolve_completions("sr") == ["src/"]


def test_empty_line_lists_commands(engine):
    candidates = engine.resolve_completions("")
    assert "brew" in candidates
    assert "make" in candidates
    assert "ls" in candidates


def test_quoted_prefix(engine):
    result = engine.complete('cat "sr')
    assert result.candidates == ["src/"]
    assert result.quote == '"'


def test_cursor_position(engine):
    assert engine.resolve_completions("pip ins --upgrade", 7) == ["install"]


def test_make(engine):
    assert engine.resolve_completions("make b") == ["build"]
    candidates = engine.resolve_completions("make ")
    assert "clean" in candidates
    assert "--jobs" in candidates


def test_ssh(engine):
    assert engine.resolve_completions("ssh root@we") == ["root@web1", "root@web2"]
    assert engine.resolve_completions("ssh -") == sorted(engine.store.lookup("ssh").labels)


def test_vox(engine):
    assert engine.resolve_completions("vox activate py") == ["py311", "py312"]
    assert engine.resolve_completions("vox cr") == ["create"]
    assert engine.resolve_completions("vox create --sy") == ["--system-site-packages"]


def test_user_definition_shadows_builtin(definitions_dir, make_engine, workdir):
    (definitions_dir / "vox.yaml").write_text("- new\n- list\n")
    engine = make_engine()
    assert engine.resolve_completions("vox ") == ["list", "new"]


def test_aliases(make_engine, workdir):
    engine = make_engine(aliases={"pi": "pip install"})
    assert engine.resolve_completions("pi --req") == ["--requirement"]
    assert "pi" in engine.resolve_completions("p")


def test_failing_provider_is_skipped(engine, mocker):
    mocker.patch.object(engine.builtin_provider, "complete", side_effect=RuntimeError("boom"))
    assert "--jobs" in engine.resolve_completions("make --j")


@pytest.mark.parametrize("line", LINES)
def test_candidates_are_unique(engine, line):
    candidates = engine.resolve_completions(line)
    assert len(candidates) == len(set(candidates))


@pytest.mark.parametrize("line", LINES)
def test_candidates_extend_the_prefix(engine, line):
    result = engine.complete(line)
    assert all(candidate.startswith(result.context.prefix) for candidate in result.candidates)


@pytest.mark.parametrize("line", LINES)
def test_resolution_is_idempotent(engine, line):
    assert engine.resolve_completions(line) == engine.resolve_completions(line)


def test_explicit_reload(definitions_dir, engine):
    (definitions_dir / "npm.yaml").write_text("- install\n- run\n")
    assert engine.resolve_completions("npm r") == []
    engine.reload()
    assert engine.resolve_completions("npm r") == ["run"]


def test_on_demand_reload(definitions_dir, make_engine, workdir):
    engine = make_engine(reload="on_demand")
    assert engine.resolve_completions("npm r") == []
    (definitions_dir / "npm.yaml").write_text("- install\n- run\n")
    assert engine.resolve_completions("npm r") == ["run"]


def test_unknown_reload_policy(make_engine, workdir):
    assert make_engine(reload="sometimes").reload_policy == "on_demand"


def test_missing_definitions_directory(make_engine, tmp_path, workdir):
    engine = make_engine(definitions_dir=str(tmp_path / "missing"))
    assert engine.resolve_completions("vox cr") == ["create"]
    assert engine.resolve_completions("pip ins") == []


def test_deeply_nested_definition_does_not_break_others(definitions_dir, make_engine, workdir):
    (definitions_dir / "npm.json").write_text("[" * 100000 + "]" * 100000)
    engine = make_engine()
    assert engine.resolve_completions("brew u") == ["uninstall", "untap", "update", "upgrade"]
    assert engine.resolve_completions("npm i") == []


def test_unreadable_definitions_directory(make_engine, mocker, workdir):
    mocker.patch("shellcomplete.definitions.store.iter_definition_files", side_effect=PermissionError("denied"))
    engine = make_engine(reload="on_demand")
    assert engine.resolve_completions("vox cr") == ["create"]
    assert not engine.reload().ok


def test_negative_max_path_entries_uses_the_default(make_engine, workdir):
    engine = make_engine(max_path_entries=-1)
    assert engine.path_provider.max_entries == 2000
    assert engine.resolve_completions("foo ba") == ["bar/", "ba", "baz"]
