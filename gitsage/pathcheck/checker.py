"""Check whether the executable is reachable via PATH, and add it there."""

from __future__ import annotations

import abc
import ntpath
import os
import posixpath
import stat
import subprocess
import sys

from gitsage.pathcheck.errors import (
    create_directory_error,
    get_executable_path_error,
    get_home_dir_error,
    modify_profile_error,
    path_too_long_error,
    permission_denied_error,
    windows_setx_error,
)
from gitsage.pathcheck.shell import (
    PathAddResult,
    ShellType,
    generate_export_statement_for_shell,
)

SETX_MAX_LENGTH = 1024
_DEFAULT_PROFILE_MODE = 0o644
_PROFILE_DIR_MODE = 0o755


def detect_shell(shell: str) -> ShellType:
    """Classify a shell from its path, as found in the SHELL variable."""
    if not shell:
        return ShellType.UNKNOWN
    name = posixpath.basename(shell.rstrip("/")) or shell
    if "bash" in name:
        return ShellType.BASH
    if "zsh" in name:
        return ShellType.ZSH
    if "fish" in name:
        return ShellType.FISH
    return ShellType.UNKNOWN


def _current_os() -> str:
    if sys.platform == "win32":
        return "windows"
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform


def _home_dir() -> str:
    home = os.environ.get("HOME", "")
    if not home:
        raise get_home_dir_error(OSError("$HOME is not defined"))
    return home


class Checker(abc.ABC):
    """Finds the executable's directory and manages its presence in PATH."""

    _pathmod = os.path
    _list_separator = os.pathsep

    def __init__(self, executable_path: str | os.PathLike[str]) -> None:
        self.executable_path = os.fspath(executable_path)

    def executable_dir(self) -> str:
        """Directory holding the executable, with symlinks resolved where possible."""
        try:
            resolved = os.path.realpath(self.executable_path, strict=True)
        except (OSError, ValueError):
            resolved = self.executable_path
        return self._pathmod.normpath(self._pathmod.dirname(resolved))

    def os_name(self) -> str:
        """Name of the operating system the program runs on."""
        return _current_os()

    @abc.abstractmethod
    def is_in_path(self) -> bool:
        """Whether the executable directory is listed in PATH."""

    @abc.abstractmethod
    def add_to_path(self) -> PathAddResult:
        """Make the executable directory part of the user's PATH."""

    @abc.abstractmethod
    def shell_profile(self) -> str:
        """Profile file that PATH changes are written to, or "" if none is used."""

    def _split_path_list(self, value: str) -> list[str]:
        return value.split(self._list_separator)

    def _normalize(self, path: str) -> str:
        return self._pathmod.normpath(path)

    def _path_entries(self) -> list[str]:
        value = os.environ.get("PATH", "")
        return self._split_path_list(value) if value else []

    def _contains_dir(self, directory: str) -> bool:
        target = self._normalize(directory)
        return any(self._normalize(entry) == target for entry in self._path_entries())


class UnixChecker(Checker):
    """Checker for Linux and macOS; edits the shell profile file."""

    _pathmod = posixpath
    _list_separator = ":"

    def is_in_path(self) -> bool:
        return self._contains_dir(self.executable_dir())

    def shell_type(self) -> ShellType:
        """Shell detected from the SHELL environment variable."""
        return detect_shell(os.environ.get("SHELL", ""))

    def generate_export_statement(self, exec_dir: str) -> str:
        """Profile snippet adding exec_dir to PATH for the current shell."""
        return generate_export_statement_for_shell(self.shell_type(), exec_dir)

    def profile_path_for_shell(self, shell_type: ShellType, home_dir: str) -> str:
        """Profile file used for the given shell under home_dir."""
        join = self._pathmod.join
        if shell_type is ShellType.BASH:
            bashrc = join(home_dir, ".bashrc")
            if os.path.exists(bashrc):
                return bashrc
            bash_profile = join(home_dir, ".bash_profile")
            if os.path.exists(bash_profile):
                return bash_profile
            return bashrc
        if shell_type is ShellType.ZSH:
            return join(home_dir, ".zshrc")
        if shell_type is ShellType.FISH:
            return join(home_dir, ".config", "fish", "config.fish")
        return join(home_dir, ".profile")

    def shell_profile(self) -> str:
        return self.profile_path_for_shell(self.shell_type(), _home_dir())

    def add_to_path(self) -> PathAddResult:
        """Append an export statement to the shell profile, keeping its permissions."""
        exec_dir = self.executable_dir()
        profile_path = self.shell_profile()
        statement = self.generate_export_statement(exec_dir)

        profile_dir = self._pathmod.dirname(profile_path)
        try:
            os.makedirs(profile_dir, mode=_PROFILE_DIR_MODE, exist_ok=True)
        except OSError as exc:
            raise create_directory_error(profile_dir, exc) from exc

        try:
            file_mode = stat.S_IMODE(os.stat(profile_path).st_mode)
        except OSError:
            file_mode = _DEFAULT_PROFILE_MODE

        try:
            with open(
                profile_path,
                "a",
                encoding="utf-8",
                opener=lambda path, flags: os.open(path, flags, file_mode),
            ) as handle:
                handle.write(statement)
        except PermissionError as exc:
            raise permission_denied_error(profile_path, exc) from exc
        except OSError as exc:
            raise modify_profile_error(profile_path, exc) from exc

        try:
            if stat.S_IMODE(os.stat(profile_path).st_mode) != file_mode:
                os.chmod(profile_path, file_mode)
        except OSError:
            pass

        return PathAddResult(
            success=True,
            added_path=exec_dir,
            profile_path=profile_path,
            message=(
                f"Successfully added {exec_dir} to PATH in {profile_path}. "
                f"Please restart your terminal or run: source {profile_path}"
            ),
            needs_reload=True,
        )


def _split_windows_path_list(value: str) -> list[str]:
    entries: list[str] = []
    current: list[str] = []
    quoted = False
    for char in value:
        if char == '"':
            quoted = not quoted
        elif char == ";" and not quoted:
            entries.append("".join(current))
            current = []
        else:
            current.append(char)
    entries.append("".join(current))
    return entries


def _parse_reg_query_output(output: str) -> str:
    for line in output.splitlines():
        line = line.strip()
        if line.upper().startswith("PATH"):
            parts = line.split()
            if len(parts) >= 3:
                return " ".join(parts[2:])
    return ""


def _read_user_path() -> str:
    try:
        completed = subprocess.run(
            ["reg", "query", "HKCU\\Environment", "/v", "PATH"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return ""
    if completed.returncode != 0:
        return ""
    return _parse_reg_query_output(completed.stdout or "")


class WindowsChecker(Checker):
    """Checker for Windows; updates the user PATH with setx."""

    _pathmod = ntpath
    _list_separator = ";"

    def _split_path_list(self, value: str) -> list[str]:
        return _split_windows_path_list(value)

    def _normalize(self, path: str) -> str:
        return ntpath.normpath(path).lower()

    def is_in_path(self) -> bool:
        return self._contains_dir(self.executable_dir())

    def shell_profile(self) -> str:
        return ""

    def add_to_path(self) -> PathAddResult:
        """Append the executable directory to the user PATH via setx."""
        exec_dir = self.executable_dir()
        if self._contains_dir(exec_dir):
            return PathAddResult(
                success=True,
                added_path=exec_dir,
                message=f"{exec_dir} is already in PATH",
                needs_reload=False,
            )

        user_path = _read_user_path()
        new_path = f"{user_path};{exec_dir}" if user_path else exec_dir
        if len(new_path) > SETX_MAX_LENGTH:
            raise path_too_long_error(SETX_MAX_LENGTH)

        try:
            completed = subprocess.run(
                ["setx", "PATH", new_path],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise windows_setx_error(exc, "") from exc
        if completed.returncode != 0:
            output = (completed.stdout or "").strip()
            failure = subprocess.CalledProcessError(
                completed.returncode, completed.args, output
            )
            raise windows_setx_error(failure, output)

        return PathAddResult(
            success=True,
            added_path=exec_dir,
            message=(
                f"Successfully added {exec_dir} to PATH. "
                "Please restart your terminal for changes to take effect."
            ),
            needs_reload=True,
        )


def _default_executable_path() -> str:
    argv0 = sys.argv[0] if sys.argv else ""
    if argv0 and os.path.isfile(argv0):
        return os.path.abspath(argv0)
    if sys.executable:
        return sys.executable
    raise get_executable_path_error(OSError("cannot determine the running executable"))


def new_checker(executable_path: str | os.PathLike[str] | None = None) -> Checker:
    """Create the checker suited to this platform for the given (or running) executable."""
    path = _default_executable_path() if executable_path is None else executable_path
    if os.name == "nt":
        return WindowsChecker(path)
    return UnixChecker(path)