"""Interactive and non-interactive presentation of generated commit messages."""

from __future__ import annotations

import enum
import os
import shlex
import subprocess
import sys
import tempfile
from dataclasses import dataclass

from gitsage.ui.spinner import ProgressSpinner, Spinner

_RULE = "-" * 50


class Action(enum.IntEnum):
    """What the user chose to do with a generated message."""

    ACCEPT = 0
    EDIT = 1
    REGENERATE = 2
    CANCEL = 3

    def __str__(self) -> str:
        return self.name.lower()


@dataclass
class CommitMessage:
    """A commit message split into its parts, plus the raw text it came from."""

    subject: str = ""
    body: str = ""
    footer: str = ""
    raw_text: str = ""

    @property
    def effective_subject(self) -> str:
        """The subject, or the first line of the raw text when the subject is empty."""
        if not self.subject and self.raw_text:
            return self.raw_text.split("\n")[0]
        return self.subject


@dataclass(frozen=True)
class _Style:
    codes: str = ""

    def render(self, text: str) -> str:
        if not self.codes:
            return text
        return f"\x1b[{self.codes}m{text}\x1b[0m"


@dataclass(frozen=True)
class _Styles:
    title: _Style
    subject: _Style
    body: _Style
    footer: _Style
    success: _Style
    error: _Style
    info: _Style


def _build_styles(color_enabled: bool) -> _Styles:
    if not color_enabled:
        plain = _Style()
        return _Styles(plain, plain, plain, plain, plain, plain, plain)
    return _Styles(
        title=_Style("1;38;5;39"),
        subject=_Style("1;38;5;220"),
        body=_Style("38;5;252"),
        footer=_Style("3;38;5;245"),
        success=_Style("1;38;5;42"),
        error=_Style("1;38;5;196"),
        info=_Style("38;5;39"),
    )


_ACTION_CHOICES = (
    (Action.ACCEPT, "Accept", "›", "Commit with this message"),
    (Action.EDIT, "Edit", "•", "Modify the message"),
    (Action.REGENERATE, "Regenerate", "↻", "Generate a new message"),
    (Action.CANCEL, "Cancel", "×", "Abort without committing"),
)

_ACTION_KEYS: dict[str, Action] = {"": Action.ACCEPT, "q": Action.CANCEL}
for _number, (_action, _label, _icon, _desc) in enumerate(_ACTION_CHOICES, start=1):
    _ACTION_KEYS[str(_number)] = _action
    _ACTION_KEYS[_label.lower()] = _action
    _ACTION_KEYS[_label.lower()[0]] = _action


def format_message_for_edit(message: CommitMessage) -> str:
    """Lay the message out as text: subject, body and footer separated by blank lines."""
    parts = [message.effective_subject]
    if message.body:
        parts.append(message.body)
    if message.footer:
        parts.append(message.footer)
    return "\n\n".join(parts)


def parse_edited_message(edited: str) -> CommitMessage:
    """Split edited text back into subject, body and footer."""
    edited = edited.strip()
    if not edited:
        return CommitMessage()
    parts = [part.strip() for part in edited.split("\n\n", 2)]
    parts += [""] * (3 - len(parts))
    return CommitMessage(
        subject=parts[0], body=parts[1], footer=parts[2], raw_text=edited
    )


def _require_message(message: CommitMessage | None) -> CommitMessage:
    if message is None:
        raise ValueError("message cannot be empty")
    return message


class DefaultManager:
    """Terminal UI that asks the user what to do and lets them edit messages."""

    def __init__(
        self, color_enabled: bool = True, editor: str = "", auto_accept: bool = False
    ) -> None:
        self.color_enabled = color_enabled
        self.editor = editor
        self.auto_accept = auto_accept
        self._styles = _build_styles(color_enabled)

    def display_message(self, message: CommitMessage | None) -> None:
        """Print the generated message inside a titled frame."""
        message = _require_message(message)
        print()
        print(self._styles.title.render("Generated Commit Message"))
        print(_RULE)
        print(self._styles.subject.render(message.effective_subject))
        if message.body:
            print()
            print(self._styles.body.render(message.body))
        if message.footer:
            print()
            print(self._styles.footer.render(message.footer))
        print(_RULE)
        print()

    def prompt_action(self) -> Action:
        """Ask the user what to do; accepts at once when auto-accept is on."""
        if self.auto_accept:
            return Action.ACCEPT
        print(self._styles.title.render("What would you like to do?"))
        print()
        for number, (_action, label, icon, desc) in enumerate(_ACTION_CHOICES, start=1):
            print(f"  {number}. {icon} {label} - {desc}")
        print()
        while True:
            try:
                answer = input("Select 1-4 (Enter to accept, q to cancel): ")
            except (EOFError, KeyboardInterrupt):
                return Action.CANCEL
            action = _ACTION_KEYS.get(answer.strip().lower())
            if action is not None:
                return action
            print(self._styles.info.render("Please choose 1-4 or q."))

    def edit_message(self, message: CommitMessage | None) -> CommitMessage:
        """Let the user edit the message in an external editor or inline."""
        message = _require_message(message)
        content = format_message_for_edit(message)
        editor = self.resolve_editor()
        if editor:
            try:
                return parse_edited_message(self._edit_externally(editor, content))
            except (OSError, ValueError, subprocess.CalledProcessError):
                print(
                    self._styles.info.render(
                        "External editor not available, using inline editor..."
                    )
                )
        try:
            edited = self._edit_inline(content)
        except KeyboardInterrupt as exc:
            raise RuntimeError("failed to edit message: cancelled") from exc
        return parse_edited_message(edited)

    def resolve_editor(self) -> str:
        """Editor from the configuration, then EDITOR, then VISUAL; "" if none."""
        return (
            self.editor
            or os.environ.get("EDITOR", "")
            or os.environ.get("VISUAL", "")
        )

    def show_spinner(self, text: str) -> Spinner:
        return Spinner(text)

    def show_progress_spinner(self, text: str, total: int) -> ProgressSpinner:
        return ProgressSpinner(text, total)

    def show_error(self, err: BaseException | None) -> None:
        """Print an error message; does nothing for None."""
        if err is None:
            return
        print()
        print(self._styles.error.render(f"Error: {err}"))
        print()

    def show_success(self, message: str) -> None:
        print()
        print(self._styles.success.render(f"[OK] {message}"))
        print()

    def prompt_confirm(self, message: str) -> bool:
        """Ask a yes/no question, defaulting to yes; true at once when auto-accept is on."""
        if self.auto_accept:
            return True
        prompt = f"{self._styles.subject.render(message)} [Y]es / [N]o "
        while True:
            try:
                answer = input(prompt).strip().lower()
            except (EOFError, KeyboardInterrupt):
                return False
            if answer in ("", "y", "yes"):
                return True
            if answer in ("n", "no", "q"):
                return False

    @staticmethod
    def _edit_externally(editor: str, content: str) -> str:
        fd, tmp_path = tempfile.mkstemp(prefix="gitsage-commit-", suffix=".txt")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            subprocess.run([*shlex.split(editor), tmp_path], check=True)
            with open(tmp_path, encoding="utf-8") as handle:
                return handle.read()
        finally:
            try:
                os.remove(tmp_path)
            except OSError:
                pass

    def _edit_inline(self, content: str) -> str:
        print(self._styles.title.render("Edit Commit Message"))
        print("Current message:")
        print(content)
        print()
        print("Type the new message. Finish with Ctrl+D; an empty input keeps it as is.")
        lines: list[str] = []
        while True:
            try:
                lines.append(input())
            except EOFError:
                break
        edited = "\n".join(lines)
        return edited if edited.strip() else content


class NonInteractiveManager:
    """UI for unattended runs: prints plainly and accepts everything."""

    def __init__(self, color_enabled: bool = True) -> None:
        self.color_enabled = color_enabled
        self.auto_accept = True
        self._styles = _build_styles(color_enabled)

    def display_message(self, message: CommitMessage | None) -> None:
        """Print the message as plain text."""
        message = _require_message(message)
        print(message.effective_subject)
        if message.body:
            print()
            print(message.body)
        if message.footer:
            print()
            print(message.footer)

    def prompt_action(self) -> Action:
        """Accept the message; unattended runs never ask."""
        return Action.ACCEPT if self.auto_accept else Action.CANCEL

    def edit_message(self, message: CommitMessage | None) -> CommitMessage | None:
        """Keep the message as generated; unattended runs never open an editor."""
        if self.auto_accept:
            return message
        return parse_edited_message(format_message_for_edit(_require_message(message)))

    def show_spinner(self, text: str) -> Spinner:
        return Spinner(text)

    def show_progress_spinner(self, text: str, total: int) -> ProgressSpinner:
        return ProgressSpinner(text, total)

    def show_error(self, err: BaseException | None) -> None:
        if err is None:
            return
        print(f"Error: {err}", file=sys.stderr)

    def show_success(self, message: str) -> None:
        print(message)

    def prompt_confirm(self, message: str) -> bool:
        """Confirm without asking, as unattended runs accept everything."""
        return self.auto_accept