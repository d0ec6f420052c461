class RuleSyntaxError(ValueError):
    """
    Exception raised when an exclusion rule cannot be compiled into a matcher.

    Malformed glob syntax is a configuration error that aborts the run, so the
    exception keeps the offending rule text exactly as it was written.

    Attributes:
        rule (str): The raw rule text, including any leading '!'.
        reason (str): Short description of what is wrong with the pattern.

    Example:
        >>> error = RuleSyntaxError("src/[abc", "unterminated character set")
        >>> str(error)
        "Invalid exclusion rule 'src/[abc': unterminated character set"
        >>> error.rule
        'src/[abc'
    """

    def __init__(self, rule: str, reason: str) -> None:
        """
        Initialize the exception with the rule text and the reason it was rejected.

        Args:
            rule (str): The raw rule text.
            reason (str): Description of the syntax problem.
        """
        self.rule = rule
        self.reason = reason
        super().__init__(f"Invalid exclusion rule '{rule}': {reason}")


class ScanError(OSError):
    """
    Exception raised when a directory cannot be read during tree construction.

    There is no partial-result mode: any directory that cannot be listed aborts the
    scan. The failing path is kept so the CLI can report it.

    Attributes:
        path (str): The directory that could not be read.

    Example:
        >>> error = ScanError("/srv/docs/private", "Permission denied")
        >>> str(error)
        'Cannot read directory /srv/docs/private: Permission denied'
    """

    def __init__(self, path: str, cause: object) -> None:
        """
        Initialize the exception with the failing path and the underlying cause.

        Args:
            path (str): Directory that could not be read.
            cause (object): The underlying error or a description of it.
        """
        self.path = path
        super().__init__(f"Cannot read directory {path}: {cause}")
