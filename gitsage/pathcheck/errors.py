"""Errors raised while checking or modifying PATH."""

from __future__ import annotations

import enum


class PathErrorCode(enum.IntEnum):
    """Category of a PATH-related failure."""

    GET_EXECUTABLE_PATH = 0
    READ_PATH = 1
    DETECT_SHELL = 2
    MODIFY_PROFILE = 3
    WINDOWS_SETX = 4
    PERMISSION_DENIED = 5
    CREATE_DIRECTORY = 6
    GET_HOME_DIR = 7
    PATH_TOO_LONG = 8

    def __str__(self) -> str:
        return _CODE_NAMES[self]


_CODE_NAMES = {
    PathErrorCode.GET_EXECUTABLE_PATH: "GetExecutablePath",
    PathErrorCode.READ_PATH: "ReadPATH",
    PathErrorCode.DETECT_SHELL: "DetectShell",
    PathErrorCode.MODIFY_PROFILE: "ModifyProfile",
    PathErrorCode.WINDOWS_SETX: "WindowsSetx",
    PathErrorCode.PERMISSION_DENIED: "PermissionDenied",
    PathErrorCode.CREATE_DIRECTORY: "CreateDirectory",
    PathErrorCode.GET_HOME_DIR: "GetHomeDir",
    PathErrorCode.PATH_TOO_LONG: "PathTooLong",
}


class PathCheckError(Exception):
    """A PATH check failure with a category and an optional cause."""

    def __init__(
        self,
        code: PathErrorCode,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.cause = cause
        self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


def wrap_path_check_error(
    err: BaseException, code: PathErrorCode, message: str
) -> PathCheckError:
    """Wrap an arbitrary exception in a PathCheckError."""
    return PathCheckError(code, message, err)


def get_executable_path_error(cause: BaseException | None) -> PathCheckError:
    return PathCheckError(
        PathErrorCode.GET_EXECUTABLE_PATH, "failed to get executable path", cause
    )


def read_path_error(cause: BaseException | None) -> PathCheckError:
    return PathCheckError(
        PathErrorCode.READ_PATH, "failed to read PATH environment variable", cause
    )


def detect_shell_error() -> PathCheckError:
    return PathCheckError(PathErrorCode.DETECT_SHELL, "failed to detect shell type")


def modify_profile_error(profile_path: str, cause: BaseException | None) -> PathCheckError:
    return PathCheckError(
        PathErrorCode.MODIFY_PROFILE,
        f"failed to modify shell profile: {profile_path}",
        cause,
    )


def windows_setx_error(cause: BaseException | None, output: str) -> PathCheckError:
    message = f"setx command failed: {output}" if output else "setx command failed"
    return PathCheckError(PathErrorCode.WINDOWS_SETX, message, cause)


def permission_denied_error(path: str, cause: BaseException | None) -> PathCheckError:
    return PathCheckError(
        PathErrorCode.PERMISSION_DENIED, f"permission denied: {path}", cause
    )


def create_directory_error(path: str, cause: BaseException | None) -> PathCheckError:
    return PathCheckError(
        PathErrorCode.CREATE_DIRECTORY, f"failed to create directory: {path}", cause
    )


def get_home_dir_error(cause: BaseException | None) -> PathCheckError:
    return PathCheckError(PathErrorCode.GET_HOME_DIR, "failed to get home directory", cause)


def path_too_long_error(limit: int) -> PathCheckError:
    return PathCheckError(
        PathErrorCode.PATH_TOO_LONG,
        f"PATH value exceeds system limit of {limit} characters",
    )