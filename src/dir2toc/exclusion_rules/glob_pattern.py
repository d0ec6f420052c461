"""Compilation of exclusion rule text into glob matchers.

A rule is one line of a rules file. A leading '!' negates the rule, and a pattern
ending in '/' is directory shorthand that expands into four matchers covering the
named directory and everything beneath it, both at the scan root and at any depth.
"""

import re
from typing import Any, List, Tuple

from pathspec.pattern import RegexPattern
from pathspec.util import normalize_file

from dir2toc.exceptions import RuleSyntaxError

# Expansion templates for directory shorthand, in evaluation order:
# descendants at any depth, descendants at the root, the directory at any depth,
# the directory at the root.
DIRECTORY_SHORTHAND_TEMPLATES = ("**/{dir}/**", "{dir}/**", "**/{dir}", "{dir}")

# POSIX character classes allowed inside a set, as regex set members
_POSIX_CLASSES = {
    "alnum": "a-zA-Z0-9",
    "alpha": "a-zA-Z",
    "blank": " \\t",
    "digit": "0-9",
    "lower": "a-z",
    "punct": r"!-/:-@\[-`{-~",
    "space": " \\t\\n\\r\\f\\v",
    "upper": "A-Z",
    "word": "a-zA-Z0-9_",
    "xdigit": "0-9A-Fa-f",
}

# Characters that must be escaped inside a regex character set
_SET_SPECIALS = frozenset("\\[]&~|")


class GlobPatternError(ValueError):
    """Raised by GlobPattern when a pattern is not well-formed glob syntax."""

    pass


class GlobPattern(RegexPattern):  # type: ignore
    """Glob pattern compiled to an anchored regular expression.

    The dialect matches POSIX-style relative paths:

    - ``*`` matches any run of characters within a single path segment.
    - ``**`` occupying a whole segment matches across segments, including zero
      segments when followed by ``/``. Elsewhere it behaves like ``*``.
    - ``?`` matches exactly one character other than ``/``.
    - ``[...]`` matches a character set; ``[!...]`` and ``[^...]`` negate it.
    - ``{a,b}`` matches any of the comma-separated alternatives.
    - ``\\x`` matches the character ``x`` literally.

    The whole path must match, and wildcards match any character other than
    ``/``, newlines included. Trailing slashes on the candidate path are ignored.

    Example:
        >>> GlobPattern("*.log").matches("debug.log")
        True
        >>> GlobPattern("*.log").matches("logs/debug.log")
        False
        >>> GlobPattern("**/*.log").matches("logs/debug.log")
        True
        >>> GlobPattern("src/{lib,bin}/?.c").matches("src/bin/a.c")
        True
    """

    @classmethod
    def pattern_to_regex(cls, pattern: str) -> Tuple[str, bool]:
        """Convert a glob pattern into a regular expression string.

        Args:
            pattern: The glob pattern to translate.

        Returns:
            A tuple of the regular expression and the include flag. The include flag
            is always True; negation is tracked by the owning Rule.

        Raises:
            GlobPatternError: If the pattern has an unterminated set or group, or a
                dangling escape.

        Example:
            >>> GlobPattern.pattern_to_regex("docs/**")
            ('(?s)^docs/.*/*\\\\Z', True)
        """
        parts: List[str] = []
        depth = 0
        i = 0
        n = len(pattern)

        while i < n:
            char = pattern[i]

            if char == "*":
                end = i
                while end < n and pattern[end] == "*":
                    end += 1
                starts_segment = i == 0 or pattern[i - 1] == "/"
                ends_segment = end == n or pattern[end] == "/"
                if end - i >= 2 and starts_segment and ends_segment:
                    if end < n:
                        # '**/' swallows its separator so it can match zero segments
                        parts.append("(?:.*/)?")
                        i = end + 1
                    else:
                        parts.append(".*")
                        i = end
                else:
                    parts.append("[^/]*")
                    i = end

            elif char == "?":
                parts.append("[^/]")
                i += 1

            elif char == "[":
                regex_set, i = cls._translate_set(pattern, i)
                parts.append(regex_set)

            elif char == "{":
                depth += 1
                parts.append("(?:")
                i += 1

            elif char == "," and depth > 0:
                parts.append("|")
                i += 1

            elif char == "}" and depth > 0:
                depth -= 1
                parts.append(")")
                i += 1

            elif char == "\\":
                if i + 1 >= n:
                    raise GlobPatternError("dangling escape at end of pattern")
                parts.append(re.escape(pattern[i + 1]))
                i += 2

            else:
                parts.append(re.escape(char))
                i += 1

        if depth > 0:
            raise GlobPatternError("unterminated '{' group")

        return "(?s)^" + "".join(parts) + r"/*\Z", True

    @staticmethod
    def _translate_set(pattern: str, start: int) -> Tuple[str, int]:
        """Translate the character set opening at ``start``.

        POSIX classes such as ``[:alpha:]`` may appear among the members.

        Returns:
            The regex character set and the index just past the closing bracket.

        Raises:
            GlobPatternError: If the set or a class inside it is unterminated, or a
                class name is unknown.

        Example:
            >>> GlobPattern._translate_set("[[:digit:]_]x", 0)
            ('[0-9_]', 12)
        """
        n = len(pattern)
        i = start + 1
        negate = False
        if i < n and pattern[i] in "!^":
            negate = True
            i += 1

        members: List[str] = []
        # A ']' directly after the opening bracket is a literal member
        if i < n and pattern[i] == "]":
            members.append("\\]")
            i += 1
        while i < n and pattern[i] != "]":
            if pattern.startswith("[:", i):
                end = pattern.find(":]", i + 2)
                if end < 0:
                    raise GlobPatternError("unterminated character class")
                name = pattern[i + 2 : end]
                if name not in _POSIX_CLASSES:
                    raise GlobPatternError(f"unknown character class '[:{name}:]'")
                members.append(_POSIX_CLASSES[name])
                i = end + 2
            else:
                char = pattern[i]
                members.append("\\" + char if char in _SET_SPECIALS else char)
                i += 1
        if i >= n:
            raise GlobPatternError("unterminated character set")

        body = "".join(members)
        if negate:
            return f"[^{body}/]", i + 1
        return f"[{body}]", i + 1

    def matches(self, path: str) -> bool:
        """Check whether a relative path matches this pattern.

        Backslashes in the path are converted to forward slashes first.

        Args:
            path: Path relative to the scan root.

        Returns:
            True if the whole path matches the pattern.
        """
        return self.regex.match(normalize_file(path, separators=["\\"])) is not None


class Rule:
    """A single compiled exclusion rule.

    Attributes:
        raw (str): The rule text as written, used for diagnostics and equality.
        negated (bool): True if the rule re-includes paths (written with a leading '!').
        pattern (str): The glob pattern with the '!' and surrounding whitespace removed.
        matchers (Tuple[GlobPattern, ...]): One matcher, or four for directory shorthand.

    Example:
        >>> rule = compile_rule("!build/")
        >>> rule.negated, rule.pattern, len(rule.matchers)
        (True, 'build/', 4)
        >>> rule.matches("a/build/out.txt")
        True
    """

    def __init__(self, raw: str, negated: bool, pattern: str, matchers: Tuple[GlobPattern, ...]) -> None:
        self.raw = raw
        self.negated = negated
        self.pattern = pattern
        self.matchers = matchers

    def matches(self, path: str) -> bool:
        """Check whether any of the rule's matchers matches a relative path."""
        return any(matcher.matches(path) for matcher in self.matchers)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Rule):
            return False
        return self.raw == other.raw

    def __hash__(self) -> int:
        return hash(self.raw)

    def __repr__(self) -> str:
        return f"Rule({self.raw!r})"


def expand_pattern(pattern: str) -> List[str]:
    """Expand a pattern into the glob patterns that implement it.

    Patterns ending in '/' are directory shorthand and expand into four globs.
    Any other pattern is returned unchanged.

    Example:
        >>> expand_pattern("build/")
        ['**/build/**', 'build/**', '**/build', 'build']
        >>> expand_pattern("*.log")
        ['*.log']
    """
    if pattern.endswith("/"):
        directory = pattern.rstrip("/")
        return [template.format(dir=directory) for template in DIRECTORY_SHORTHAND_TEMPLATES]
    return [pattern]


def compile_rule(raw: str) -> Rule:
    """Compile one rule line into a Rule.

    The line is expected to be trimmed, non-empty and not a comment; filtering of
    blank and comment lines happens when rule files are read.

    Args:
        raw: The rule text, optionally starting with '!'.

    Returns:
        The compiled Rule.

    Raises:
        RuleSyntaxError: If the pattern is empty or is not well-formed glob syntax.

    Example:
        >>> compile_rule("*.pyc").matches("cache.pyc")
        True
        >>> compile_rule("src/[abc")
        Traceback (most recent call last):
            ...
        dir2toc.exceptions.RuleSyntaxError: Invalid exclusion rule 'src/[abc': unterminated character set
    """
    negated = raw.startswith("!")
    pattern = (raw[1:] if negated else raw).strip()
    if not pattern or not pattern.strip("/"):
        raise RuleSyntaxError(raw, "rule has no pattern")

    try:
        matchers = tuple(GlobPattern(glob) for glob in expand_pattern(pattern))
    except GlobPatternError as e:
        raise RuleSyntaxError(raw, str(e)) from e
    except re.error as e:
        raise RuleSyntaxError(raw, e.msg) from e

    return Rule(raw, negated, pattern, matchers)
