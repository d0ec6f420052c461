"""Ordered glob exclusion rules with last-match-wins negation."""

from os import PathLike
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from pathspec.util import normalize_file

from dir2toc.config import global_rules_path, local_rules_path
from dir2toc.types import PathType

from .base_rules import BaseExclusionRules
from .glob_pattern import Rule, compile_rule


def parse_rule_lines(lines: Iterable[str]) -> List[str]:
    """Reduce raw rules-file lines to the rule texts they contain.

    Each line is trimmed. Lines that are then empty, or whose first character is
    '#', are dropped.

    Example:
        >>> parse_rule_lines(["# build output", "", "  build/  ", "!build/keep.txt"])
        ['build/', '!build/keep.txt']
    """
    rule_texts = []
    for line in lines:
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        rule_texts.append(text)
    return rule_texts


def read_rule_lines(rules_file: PathType, missing_ok: bool = False) -> List[str]:
    """Read the rule texts from a UTF-8 rules file.

    Lines end only at "\\n" or "\\r\\n"; a lone "\\r" or any other line-break
    character stays part of the rule. The "\\r" of "\\r\\n" is removed by trimming.

    Args:
        rules_file: Path to the rules file.
        missing_ok: If True, a missing file yields no rules instead of an error.

    Returns:
        The rule texts in file order, with blank and comment lines removed.

    Raises:
        FileNotFoundError: If the file does not exist and missing_ok is False.
        OSError: If the file exists but cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    path = Path(rules_file)
    try:
        content = path.read_bytes().decode("utf-8")
    except FileNotFoundError:
        if missing_ok:
            return []
        raise FileNotFoundError(f"Rules file not found: {path}")
    return parse_rule_lines(content.split("\n"))


def decide(path: str, rules: Sequence[Rule]) -> bool:
    """Decide whether a relative path is included under an ordered rule list.

    Every rule is consulted in order. A rule that matches sets the verdict to
    included if it is negated and excluded otherwise, so the last matching rule
    wins. A path that no rule matches is included.

    Args:
        path: Path relative to the scan root. Backslashes are treated as separators.
        rules: Compiled rules in precedence order, lowest first.

    Returns:
        True if the path is included, False if it is excluded.

    Example:
        >>> rules = [compile_rule("*.log"), compile_rule("!important.log")]
        >>> decide("debug.log", rules), decide("important.log", rules), decide("notes.txt", rules)
        (False, True, True)
    """
    path = normalize_file(path, separators=["\\"])
    included = True
    for rule in rules:
        if rule.matches(path):
            included = rule.negated
    return included


class GlobExclusionRules(BaseExclusionRules):
    """Exclusion rules built from an ordered list of glob rules.

    Rules are kept in the order they were added. When several rules match a path,
    the one added last decides: a plain rule excludes the path and a rule written
    with a leading '!' re-includes it. Paths matched by no rule are included.

    The intended layering is global rules first, then local rules, so local rules
    override global ones. from_sources() assembles that layering from the standard
    rule-file locations.

    Attributes:
        rules (Tuple[Rule, ...]): The compiled rules in precedence order.

    Example:
        >>> rules = GlobExclusionRules(rules=["build/", "*.log", "!important.log"])
        >>> rules.exclude("a/build/out.txt")
        True
        >>> rules.exclude("important.log")
        False
        >>> rules.decide("notes.txt")
        True
    """

    def __init__(
        self,
        rules_files: Optional[Union[PathType, Sequence[PathType]]] = None,
        rules: Optional[Iterable[str]] = None,
    ) -> None:
        """Initialize GlobExclusionRules from rule files and rule texts.

        Files are loaded before individual rules, so individual rules take precedence.

        Args:
            rules_files: Path(s) to rules files that must exist.
            rules: Individual rule texts, in the syntax of a rules-file line.

        Raises:
            FileNotFoundError: If any rules file does not exist.
            RuleSyntaxError: If any rule is not well-formed glob syntax.
        """
        self._rules: List[Rule] = []

        if rules_files is not None:
            self.load_rules(rules_files)
        if rules is not None:
            for rule in rules:
                self.add_rule(rule)

    @classmethod
    def from_sources(
        cls,
        root: PathType,
        use_global: bool = True,
        extra_files: Sequence[PathType] = (),
        extra_rules: Sequence[str] = (),
        environ: Optional[Mapping[str, str]] = None,
    ) -> "GlobExclusionRules":
        """Assemble the layered rule set for a scan root.

        Precedence, lowest first: the global rules file (unless use_global is False),
        the local rules file in the scan root, each of extra_files, then each of
        extra_rules. The global and local files may be missing; extra files may not.

        Args:
            root: The scan root, which holds the local rules file.
            use_global: Whether to load the global rules file.
            extra_files: Additional rules files layered on top of the local file.
            extra_rules: Additional rule texts layered on top of everything else.
            environ: Environment used to locate the global rules file.

        Returns:
            The assembled rules.

        Raises:
            FileNotFoundError: If any of extra_files does not exist.
            RuleSyntaxError: If any rule is not well-formed glob syntax.
        """
        exclusion_rules = cls()
        if use_global:
            exclusion_rules.load_rules(global_rules_path(environ), missing_ok=True)
        exclusion_rules.load_rules(local_rules_path(root), missing_ok=True)
        for rules_file in extra_files:
            exclusion_rules.load_rules(rules_file)
        for rule in extra_rules:
            exclusion_rules.add_rule(rule)
        return exclusion_rules

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    def decide(self, path: str) -> bool:
        """Return True if the path is included under the configured rules."""
        return decide(path, self._rules)

    def exclude(self, path: str) -> bool:
        """Return True if the path is excluded under the configured rules.

        Example:
            >>> rules = GlobExclusionRules(rules=["build/", "!build/keep.txt"])
            >>> rules.exclude("build")
            True
            >>> rules.exclude("build/keep.txt")
            False
        """
        return not decide(path, self._rules)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]], missing_ok: bool = False) -> None:
        """Append the rules from one or more rules files.

        Rules from each file are appended in file order, after all rules already
        present, so they override earlier rules.

        Args:
            rules_files: Path(s) to UTF-8 rules files.
            missing_ok: If True, missing files are treated as empty.

        Raises:
            FileNotFoundError: If a file does not exist and missing_ok is False.
            RuleSyntaxError: If any rule is not well-formed glob syntax.

        Example:
            >>> import os
            >>> import tempfile
            >>> with tempfile.NamedTemporaryFile(mode='w', delete=False) as f:
            ...     _ = f.write('# logs\\n*.log\\n')
            >>> rules = GlobExclusionRules()
            >>> rules.load_rules(f.name)
            >>> rules.exclude("server.log")
            True
            >>> rules.load_rules("/no/such/file", missing_ok=True)
            >>> len(rules.rules)
            1
            >>> os.unlink(f.name)
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            compiled = [compile_rule(text) for text in read_rule_lines(rules_file, missing_ok=missing_ok)]
            self._rules.extend(compiled)

    def add_rule(self, rule: str) -> None:
        """Append a single rule.

        The rule follows the syntax of a rules-file line. A blank or comment rule
        adds nothing.

        Args:
            rule: The rule text, e.g. "*.pyc", "node_modules/" or "!keep.log".

        Raises:
            RuleSyntaxError: If the rule is not well-formed glob syntax.

        Example:
            >>> rules = GlobExclusionRules()
            >>> rules.add_rule("# just a note")
            >>> rules.rules
            ()
            >>> rules.add_rule("*.pyc")
            >>> rules.exclude("test.pyc")
            True
        """
        self._rules.extend(compile_rule(text) for text in parse_rule_lines([rule]))
