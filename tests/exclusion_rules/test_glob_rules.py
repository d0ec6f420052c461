import os
import tempfile
from pathlib import Path

import pytest

from dir2toc.config import GLOBAL_RULES_ENV_VAR, RULES_FILE_NAME
from dir2toc.exceptions import RuleSyntaxError
from dir2toc.exclusion_rules.base_rules import BaseExclusionRules
from dir2toc.exclusion_rules.glob_pattern import compile_rule
from dir2toc.exclusion_rules.glob_rules import GlobExclusionRules, decide, parse_rule_lines, read_rule_lines


@pytest.fixture
def temp_rules_file():
    with tempfile.NamedTemporaryFile(mode="w", delete=False, encoding="utf-8") as f:
        f.write("# Build output\n")
        f.write("\n")
        f.write("build/\n")
        f.write("   \n")
        f.write("*.log\n")
        f.write("  # indented comment\n")
        f.write("!important.log\n")
    yield f.name
    os.unlink(f.name)


@pytest.fixture
def layered_root(tmp_path):
    """A scan root with a local rules file and a separate global rules file."""
    root = tmp_path / "project"
    root.mkdir()
    (root / RULES_FILE_NAME).write_text("!*.bak\nlocal-only/\n", encoding="utf-8")
    global_file = tmp_path / "global-exclude"
    global_file.write_text("*.bak\nnode_modules/\n", encoding="utf-8")
    return root, {GLOBAL_RULES_ENV_VAR: str(global_file)}


def compiled(*texts):
    return [compile_rule(text) for text in texts]


def test_parse_rule_lines_drops_blank_and_comment_lines():
    lines = ["# note", "", "   ", "  *.tmp  ", "\t# tabbed note", "!keep.tmp"]
    assert parse_rule_lines(lines) == ["*.tmp", "!keep.tmp"]


def test_read_rule_lines(temp_rules_file):
    assert read_rule_lines(temp_rules_file) == ["build/", "*.log", "!important.log"]


def test_read_rule_lines_handles_crlf(tmp_path):
    rules_file = tmp_path / "rules"
    rules_file.write_bytes(b"*.log\r\n!keep.log\r\n")
    assert read_rule_lines(rules_file) == ["*.log", "!keep.log"]


def test_read_rule_lines_splits_only_on_newlines(tmp_path):
    rules_file = tmp_path / "rules"
    rules_file.write_bytes("a\x0cb.txt\nc d\ne\rf\x85g\r\n".encode("utf-8"))
    assert read_rule_lines(rules_file) == ["a\x0cb.txt", "c d", "e\rf\x85g"]


def test_read_rule_lines_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_rule_lines(tmp_path / "missing")
    assert read_rule_lines(tmp_path / "missing", missing_ok=True) == []


@pytest.mark.parametrize("path", ["README.md", "a/b/c.txt", "build", ""])
def test_decide_includes_when_no_rules(path):
    assert decide(path, []) is True


@pytest.mark.parametrize("path", ["README.md", "src/main.py", "docs"])
def test_decide_includes_when_no_rule_matches(path):
    assert decide(path, compiled("*.log", "build/")) is True


@pytest.mark.parametrize(
    "path,expected",
    [
        ("debug.log", False),
        ("important.log", True),
        ("notes.txt", True),
    ],
)
def test_decide_negation_reincludes(path, expected):
    assert decide(path, compiled("*.log", "!important.log")) == expected


def test_decide_last_matching_rule_wins():
    rules = compiled("*.log", "!*.log", "debug.log")
    assert decide("debug.log", rules) is False
    assert decide("server.log", rules) is True


def test_decide_does_not_stop_at_first_match():
    rules = compiled("!important.log", "*.log")
    assert decide("important.log", rules) is False


def test_decide_normalizes_backslashes():
    assert decide("a\\build\\out.txt", compiled("build/")) is False


def test_appending_rule_only_affects_paths_it_matches():
    paths = ["debug.log", "important.log", "notes.txt", "build/out.txt", "src/main.py"]
    rules = compiled("*.log", "!important.log")
    before = {path: decide(path, rules) for path in paths}

    extra = compile_rule("build/")
    after = {path: decide(path, rules + [extra]) for path in paths}

    for path in paths:
        if not extra.matches(path):
            assert after[path] == before[path]
    assert after["build/out.txt"] is False


def test_decide_is_repeatable():
    rules = compiled("build/", "!build/keep.txt")
    assert [decide("build/keep.txt", rules) for _ in range(3)] == [True, True, True]


def test_glob_exclusion_rules_is_base_exclusion_rules():
    assert isinstance(GlobExclusionRules(), BaseExclusionRules)


def test_glob_exclusion_rules_from_file(temp_rules_file):
    rules = GlobExclusionRules(temp_rules_file)
    assert [rule.raw for rule in rules.rules] == ["build/", "*.log", "!important.log"]
    assert rules.exclude("build")
    assert rules.exclude("a/build/out.txt")
    assert rules.exclude("debug.log")
    assert not rules.exclude("important.log")
    assert not rules.exclude("notes.txt")


def test_glob_exclusion_rules_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        GlobExclusionRules(tmp_path / "missing")


def test_glob_exclusion_rules_files_then_rules(temp_rules_file):
    rules = GlobExclusionRules(temp_rules_file, rules=["!build/"])
    assert not rules.exclude("build/out.txt")


def test_comment_rules_never_affect_decisions():
    with_comments = GlobExclusionRules(rules=["# *.md", "", "*.log"])
    without_comments = GlobExclusionRules(rules=["*.log"])
    for path in ["README.md", "# *.md", "debug.log", "docs/index.md"]:
        assert with_comments.decide(path) == without_comments.decide(path)
    assert len(with_comments.rules) == 1


def test_rules_view_is_immutable():
    rules = GlobExclusionRules(rules=["*.log"])
    view = rules.rules
    assert isinstance(view, tuple)
    rules.add_rule("build/")
    assert len(view) == 1


def test_load_rules_multiple_files(tmp_path):
    first = tmp_path / "first"
    first.write_text("*.txt\n", encoding="utf-8")
    second = tmp_path / "second"
    second.write_text("!important.txt\n", encoding="utf-8")

    rules = GlobExclusionRules()
    rules.load_rules([first, str(second)])
    assert rules.exclude("notes.txt")
    assert not rules.exclude("important.txt")


def test_load_rules_malformed_rule_aborts(tmp_path):
    rules_file = tmp_path / "rules"
    rules_file.write_text("*.log\nsrc/[abc\n", encoding="utf-8")

    rules = GlobExclusionRules()
    with pytest.raises(RuleSyntaxError) as excinfo:
        rules.load_rules(rules_file)
    assert excinfo.value.rule == "src/[abc"
    assert rules.rules == ()


def test_add_rule_malformed_raises():
    with pytest.raises(RuleSyntaxError):
        GlobExclusionRules().add_rule("*.{a,b")


def test_from_sources_orders_global_before_local(layered_root):
    root, environ = layered_root
    rules = GlobExclusionRules.from_sources(root, environ=environ)

    assert [rule.raw for rule in rules.rules] == ["*.bak", "node_modules/", "!*.bak", "local-only/"]
    # The local negation overrides the global exclusion
    assert not rules.exclude("notes.bak")
    assert rules.exclude("node_modules/pkg/index.js")
    assert rules.exclude("local-only")


def test_from_sources_without_global(layered_root):
    root, environ = layered_root
    rules = GlobExclusionRules.from_sources(root, use_global=False, environ=environ)

    assert [rule.raw for rule in rules.rules] == ["!*.bak", "local-only/"]
    assert not rules.exclude("node_modules/pkg/index.js")


def test_from_sources_missing_files_are_empty(tmp_path):
    environ = {GLOBAL_RULES_ENV_VAR: str(tmp_path / "no-global")}
    rules = GlobExclusionRules.from_sources(tmp_path, environ=environ)
    assert rules.rules == ()
    assert not rules.exclude("anything")


def test_from_sources_extras_take_precedence(layered_root, tmp_path):
    root, environ = layered_root
    extra_file = tmp_path / "extra"
    extra_file.write_text("!node_modules/\n", encoding="utf-8")

    rules = GlobExclusionRules.from_sources(
        root, environ=environ, extra_files=[extra_file], extra_rules=["*.bak"]
    )
    assert not rules.exclude("node_modules/pkg/index.js")
    assert rules.exclude("notes.bak")


def test_from_sources_missing_extra_file_raises(tmp_path):
    environ = {GLOBAL_RULES_ENV_VAR: str(tmp_path / "no-global")}
    with pytest.raises(FileNotFoundError):
        GlobExclusionRules.from_sources(tmp_path, environ=environ, extra_files=[tmp_path / "missing"])


def test_from_sources_uses_home_directory(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    (home / RULES_FILE_NAME).write_text("secret/\n", encoding="utf-8")
    root = tmp_path / "root"
    root.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))

    rules = GlobExclusionRules.from_sources(root, environ={})
    assert rules.exclude("secret/key.pem")
