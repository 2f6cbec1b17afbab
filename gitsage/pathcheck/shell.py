"""Shell types, PATH modification results and export statements."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ShellType(enum.IntEnum):
    """Kind of shell the user runs."""

    UNKNOWN = 0
    BASH = 1
    ZSH = 2
    FISH = 3
    POWERSHELL = 4
    CMD = 5

    def __str__(self) -> str:
        return self.name.lower()


@dataclass
class PathAddResult:
    """Outcome of adding the executable directory to PATH."""

    success: bool
    added_path: str = ""
    profile_path: str = ""
    message: str = ""
    needs_reload: bool = False


UNIX_EXPORT_TEMPLATE = '\n# Added by GitSage\nexport PATH="$PATH:{}"\n'
FISH_EXPORT_TEMPLATE = "\n# Added by GitSage\nset -gx PATH $PATH {}\n"


def generate_export_statement_for_shell(shell_type: ShellType, exec_dir: str) -> str:
    """Return the profile snippet that appends exec_dir to PATH."""
    if shell_type is ShellType.FISH:
        return FISH_EXPORT_TEMPLATE.format(exec_dir)
    return UNIX_EXPORT_TEMPLATE.format(exec_dir)