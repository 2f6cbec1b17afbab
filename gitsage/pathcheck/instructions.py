"""Manual PATH configuration instructions for each platform and shell."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field

from gitsage.pathcheck.shell import ShellType

_WINDOWS_STEP_PREFIX = "4. 添加: "
_UNIX_EXPORT_HINT = 'export PATH="$PATH:<path>"'
_FISH_EXPORT_HINT = "set -gx PATH $PATH <path>"


@dataclass
class ManualInstructions:
    """Step-by-step instructions for adding a directory to PATH by hand."""

    platform: str
    shell: str
    steps: list[str] = field(default_factory=list)
    example_command: str = ""


def _current_platform() -> str:
    if sys.platform == "win32":
        return "windows"
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform


def get_manual_instructions(
    exec_dir: str, shell_type: ShellType, platform: str | None = None
) -> ManualInstructions:
    """Return manual instructions for the platform (current one by default) and shell."""
    platform = platform or _current_platform()
    if platform == "windows":
        return _windows_instructions(exec_dir)
    if shell_type is ShellType.FISH:
        return _fish_instructions(exec_dir, platform)
    if shell_type is ShellType.ZSH:
        return _zsh_instructions(exec_dir, platform)
    if shell_type is ShellType.BASH:
        return _bash_instructions(exec_dir, platform)
    return _default_unix_instructions(exec_dir, platform)


def _windows_instructions(exec_dir: str) -> ManualInstructions:
    return ManualInstructions(
        platform="windows",
        shell="",
        steps=[
            "1. 打开 系统属性 > 高级 > 环境变量",
            "   (或按 Win+R, 输入 sysdm.cpl, 点击 高级 选项卡)",
            "2. 在 用户变量 中找到 PATH",
            "3. 点击 编辑, 然后点击 新建",
            f"{_WINDOWS_STEP_PREFIX}{exec_dir}",
            "5. 点击 确定 保存更改",
            "6. 重启终端或命令提示符",
        ],
        example_command=f'setx PATH "%PATH%;{exec_dir}"',
    )


def _bash_instructions(exec_dir: str, platform: str) -> ManualInstructions:
    profile_file = ".bash_profile" if platform == "darwin" else ".bashrc"
    return ManualInstructions(
        platform=platform,
        shell="bash",
        steps=[
            f"1. 编辑 ~/{profile_file}",
            f'2. 添加以下行: export PATH="$PATH:{exec_dir}"',
            f"3. 保存文件并执行: source ~/{profile_file}",
            "   或者重启终端",
        ],
        example_command=(
            f"echo 'export PATH=\"$PATH:{exec_dir}\"' >> ~/{profile_file}"
            f" && source ~/{profile_file}"
        ),
    )


def _zsh_instructions(exec_dir: str, platform: str) -> ManualInstructions:
    return ManualInstructions(
        platform=platform,
        shell="zsh",
        steps=[
            "1. 编辑 ~/.zshrc",
            f'2. 添加以下行: export PATH="$PATH:{exec_dir}"',
            "3. 保存文件并执行: source ~/.zshrc",
            "   或者重启终端",
        ],
        example_command=(
            f"echo 'export PATH=\"$PATH:{exec_dir}\"' >> ~/.zshrc && source ~/.zshrc"
        ),
    )


def _fish_instructions(exec_dir: str, platform: str) -> ManualInstructions:
    return ManualInstructions(
        platform=platform,
        shell="fish",
        steps=[
            "1. 编辑 ~/.config/fish/config.fish",
            f"2. 添加以下行: set -gx PATH $PATH {exec_dir}",
            "3. 保存文件并执行: source ~/.config/fish/config.fish",
            "   或者重启终端",
        ],
        example_command=(
            f"echo 'set -gx PATH $PATH {exec_dir}' >> ~/.config/fish/config.fish"
            " && source ~/.config/fish/config.fish"
        ),
    )


def _default_unix_instructions(exec_dir: str, platform: str) -> ManualInstructions:
    return ManualInstructions(
        platform=platform,
        shell="unknown",
        steps=[
            "1. 编辑 ~/.profile",
            f'2. 添加以下行: export PATH="$PATH:{exec_dir}"',
            "3. 保存文件并执行: source ~/.profile",
            "   或者重启终端",
            "",
            "注意: 如果您使用的是其他 shell, 请参考该 shell 的文档",
            "      来了解如何修改 PATH 环境变量。",
        ],
        example_command=(
            f"echo 'export PATH=\"$PATH:{exec_dir}\"' >> ~/.profile && source ~/.profile"
        ),
    )


def format_instructions(instructions: ManualInstructions | None) -> str:
    """Render the instructions as readable text."""
    if instructions is None:
        return ""
    result = "无法自动添加到 PATH。请手动执行以下步骤:\n\n"
    result += "".join(f"{step}\n" for step in instructions.steps)
    if instructions.example_command:
        result += "\n或者直接执行以下命令:\n"
        result += f"  {instructions.example_command}\n"
    return result


def format_instructions_english(instructions: ManualInstructions | None) -> str:
    """Render the instructions as readable English text."""
    if instructions is None:
        return ""
    result = "Unable to automatically add to PATH. Please follow these steps manually:\n\n"
    if instructions.platform == "windows":
        result += "1. Open System Properties > Advanced > Environment Variables\n"
        result += "   (Or press Win+R, type sysdm.cpl, click Advanced tab)\n"
        result += "2. Find PATH in User Variables\n"
        result += "3. Click Edit, then click New\n"
        result += f"4. Add: {_exec_dir_from_steps(instructions.steps)}\n"
        result += "5. Click OK to save changes\n"
        result += "6. Restart your terminal or command prompt\n"
    else:
        result += _format_unix_english(instructions)
    if instructions.example_command:
        result += "\nOr run this command directly:\n"
        result += f"  {instructions.example_command}\n"
    return result


def _format_unix_english(instructions: ManualInstructions) -> str:
    if instructions.shell == "fish":
        profile_file, export_cmd = "~/.config/fish/config.fish", _FISH_EXPORT_HINT
    elif instructions.shell == "zsh":
        profile_file, export_cmd = "~/.zshrc", _UNIX_EXPORT_HINT
    elif instructions.shell == "bash":
        profile_file = "~/.bash_profile" if instructions.platform == "darwin" else "~/.bashrc"
        export_cmd = _UNIX_EXPORT_HINT
    else:
        profile_file, export_cmd = "~/.profile", _UNIX_EXPORT_HINT

    result = (
        f"1. Edit {profile_file}\n"
        f"2. Add this line: {export_cmd}\n"
        f"3. Save the file and run: source {profile_file}\n"
        "   Or restart your terminal\n"
    )
    if instructions.shell == "unknown":
        result += (
            "\nNote: If you're using a different shell, please refer to its documentation\n"
            "      for instructions on modifying the PATH environment variable.\n"
        )
    return result


def _exec_dir_from_steps(steps: list[str]) -> str:
    for step in steps:
        if step.startswith(_WINDOWS_STEP_PREFIX):
            return step[len(_WINDOWS_STEP_PREFIX):]
    return "<path>"