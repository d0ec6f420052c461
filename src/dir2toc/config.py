"""Locations and defaults for dir2toc configuration.

Exclusion rules come from two optional files sharing one name: a global file in the
user's home directory and a local file in the scan root. The global location can be
redirected with the DIR2TOC_GLOBAL_EXCLUDE environment variable.
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from dir2toc.types import PathType

RULES_FILE_NAME = ".generate-toc-exclude"
GLOBAL_RULES_ENV_VAR = "DIR2TOC_GLOBAL_EXCLUDE"
DEFAULT_ROOT = "."
DEFAULT_TITLE = "Table of Contents"


def global_rules_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the location of the global rules file.

    Args:
        environ: Environment mapping to consult. Defaults to os.environ.

    Returns:
        The path named by DIR2TOC_GLOBAL_EXCLUDE if it is set and non-empty,
        otherwise RULES_FILE_NAME inside the user's home directory.

    Example:
        >>> str(global_rules_path({"DIR2TOC_GLOBAL_EXCLUDE": "/etc/toc-exclude"}))
        '/etc/toc-exclude'
    """
    if environ is None:
        environ = os.environ
    override = environ.get(GLOBAL_RULES_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / RULES_FILE_NAME


def local_rules_path(root: PathType) -> Path:
    """Return the location of the local rules file for a scan root.

    Example:
        >>> local_rules_path("/srv/docs").as_posix()
        '/srv/docs/.generate-toc-exclude'
    """
    return Path(root) / RULES_FILE_NAME
