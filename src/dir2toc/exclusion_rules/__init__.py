"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .glob_pattern import GlobPattern, Rule, compile_rule
from .glob_rules import GlobExclusionRules, decide, parse_rule_lines

__all__ = [
    "BaseExclusionRules",
    "GlobExclusionRules",
    "GlobPattern",
    "Rule",
    "compile_rule",
    "decide",
    "parse_rule_lines",
]
