from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface the tree builder uses to filter entries.

    The tree builder asks one question of its rules for every directory entry it
    meets: should this path, relative to the scan root, be left out? Implementations
    answer it through exclude().

    Implementations must be pure: the answer for a path may depend only on the path
    and the configured rules, never on which paths were asked about before. The tree
    builder relies on this when it skips whole directories.

    Example:
        >>> from dir2toc.exclusion_rules.glob_rules import GlobExclusionRules
        >>> rules = GlobExclusionRules()
        >>> rules.add_rule('*.pyc')
        >>> rules.exclude('test.pyc')
        True
        >>> rules.exclude('test.py')
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded.

        Args:
            path (str): The file or directory path to check, relative to the scan root
                and using forward slashes.

        Returns:
            bool: True if the path should be excluded, False if it should be included.

        Example:
            >>> class NoHiddenRules(BaseExclusionRules):
            ...     def exclude(self, path: str) -> bool:
            ...         return path.rsplit("/", 1)[-1].startswith(".")
            >>> rules = NoHiddenRules()
            >>> rules.exclude("docs/.cache")
            True
            >>> rules.exclude("docs/index.md")
            False
        """
        pass
