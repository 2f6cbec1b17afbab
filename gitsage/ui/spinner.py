"""Animated terminal spinners with optional progress tracking."""

from __future__ import annotations

import sys
import threading
from types import TracebackType
from typing import TextIO

DOT_FRAMES = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")
BAR_WIDTH = 20
BAR_FILLED = "█"
BAR_EMPTY = "░"
MAX_FILE_DISPLAY = 25
_FILE_TAIL = 22
_CLEAR_LINE = "\r\x1b[K"


class Spinner:
    """A loading animation drawn on one terminal line from a background thread."""

    frame_interval = 0.1

    def __init__(self, text: str = "", stream: TextIO | None = None) -> None:
        self._text = text
        self._stream = stream if stream is not None else sys.stderr
        self._frame = 0
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def text(self) -> str:
        """Text shown next to the animation."""
        return self._text

    @property
    def running(self) -> bool:
        """Whether the animation is currently shown."""
        return self._thread is not None

    def start(self) -> None:
        """Begin drawing the animation; does nothing if it is already running."""
        with self._lock:
            if self._thread is not None:
                return
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._animate, args=(self._stop_event,), daemon=True
            )
            self._draw_locked()
            self._thread.start()

    def stop(self) -> None:
        """Stop the animation and clear its line; safe to call more than once."""
        with self._lock:
            thread = self._thread
            if thread is None:
                return
            self._stop_event.set()
        thread.join()
        with self._lock:
            self._thread = None
            self._write(_CLEAR_LINE)

    def update_text(self, text: str) -> None:
        """Change the text shown next to the animation."""
        with self._lock:
            self._text = text
            if self._thread is not None:
                self._draw_locked()

    def render(self) -> str:
        """The line as it is currently drawn."""
        return f"{DOT_FRAMES[self._frame]} {self._text}"

    def __enter__(self) -> Spinner:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    def _animate(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.frame_interval):
            with self._lock:
                if stop_event.is_set():
                    return
                self._frame = (self._frame + 1) % len(DOT_FRAMES)
                self._draw_locked()

    def _draw_locked(self) -> None:
        self._write(_CLEAR_LINE + self.render())

    def _write(self, data: str) -> None:
        try:
            self._stream.write(data)
            self._stream.flush()
        except (OSError, ValueError):
            pass


def _progress_bar(percent: float) -> str:
    percent = min(max(percent, 0.0), 1.0)
    filled = round(BAR_WIDTH * percent)
    return BAR_FILLED * filled + BAR_EMPTY * (BAR_WIDTH - filled)


def _shorten_file(file: str) -> str:
    if len(file) > MAX_FILE_DISPLAY:
        return "..." + file[-_FILE_TAIL:]
    return file


class ProgressSpinner(Spinner):
    """A spinner that also shows a progress bar, a counter and the current file."""

    def __init__(
        self, text: str = "", total: int = 0, stream: TextIO | None = None
    ) -> None:
        super().__init__(text, stream)
        self._total = total
        self._current = 0
        self._current_file = ""

    @property
    def total(self) -> int:
        return self._total

    @property
    def current(self) -> int:
        return self._current

    @property
    def current_file(self) -> str:
        return self._current_file

    def update_text(self, text: str) -> None:
        """Change the text; an empty text keeps the one shown."""
        if text:
            super().update_text(text)

    def set_total(self, total: int) -> None:
        """Set the number of steps."""
        with self._lock:
            self._total = total
            if self._thread is not None:
                self._draw_locked()

    def set_current(self, current: int) -> None:
        """Set the number of steps done."""
        with self._lock:
            self._current = current
            if self._thread is not None:
                self._draw_locked()

    def set_current_file(self, file: str) -> None:
        """Set the file currently being worked on."""
        with self._lock:
            self._current_file = file
            if self._thread is not None:
                self._draw_locked()

    def render(self) -> str:
        percent = self._current / self._total if self._total > 0 else 0.0
        line = (
            f"{DOT_FRAMES[self._frame]} {_progress_bar(percent)}"
            f" {self._current}/{self._total} {self._text}"
        )
        if self._current_file:
            line += f" → {_shorten_file(self._current_file)}"
        return line