"""A terminal progress bar split into weighted segments, redrawn by a background thread."""

from __future__ import annotations

import math
import shutil
import sys
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TextIO

ExtraData = Callable[[float], str]

_REFRESH_SECONDS = 0.1
_SECONDS_PER_DAY = 24 * 3600


@dataclass(frozen=True)
class Segment:
    """One stage of a long task; ``weight`` is its share of the total work."""

    title: str
    weight: int
    extra_data: ExtraData | None = None


def console_width() -> int:
    """Width of the terminal in columns."""
    return shutil.get_terminal_size(fallback=(80, 24)).columns


def format_duration(seconds: float) -> str:
    """Format a duration as ``[DDd]HH:MM:SS.S``."""
    if not math.isfinite(seconds):
        return "--:--:--.-"
    days, rest = divmod(max(seconds, 0.0), _SECONDS_PER_DAY)
    hours, rest = divmod(rest, 3600)
    minutes, rest = divmod(rest, 60)
    prefix = f"{int(days):2d}d" if days >= 1 else ""
    return f"{prefix}{int(hours):02d}:{int(minutes):02d}:{rest:04.1f}"


def center_string(width: int, text: str) -> str:
    """Pad ``text`` with spaces to ``width``, extra space going to the right."""
    if width < len(text):
        return text
    diff = width - len(text)
    left = diff // 2
    return " " * left + text + " " * (diff - left)


def percent_string(progress: float, width: int) -> str:
    """Render ``progress`` as a percentage centred in ``width`` columns."""
    return center_string(width, f"{progress * 100.0:5.1f}%")


class ProgressBar:
    """Progress over a sequence of weighted segments.

    A bar built without segments is inert: updates are ignored and nothing is
    drawn, which lets callers report progress unconditionally.
    """

    def __init__(
        self,
        segments: Iterable[Segment | tuple] = (),
        extra_data: ExtraData | None = None,
        display_sub_progress: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self._segments = [s if isinstance(s, Segment) else Segment(*s) for s in segments]
        self._extra_data = extra_data
        self._display_sub_progress = display_sub_progress
        self._stream = stream if stream is not None else sys.stdout
        self._total_weight = sum(s.weight for s in self._segments)
        self._progress = [0.0] * len(self._segments)
        now = time.perf_counter()
        self._start_time = now
        self._segment_starts = [now] * len(self._segments)
        self._active = 0
        self._lock = threading.Lock()
        self._render_lock = threading.Lock()
        self._stop = threading.Event()
        self._running = False
        self._thread: threading.Thread | None = None

    @property
    def initialized(self) -> bool:
        return bool(self._segments)

    @property
    def running(self) -> bool:
        return self._running

    @property
    def num_segments(self) -> int:
        return len(self._segments)

    def start(self) -> None:
        """Reserve screen lines and begin redrawing in the background."""
        if not self.initialized or self._running:
            return
        self._stream.write("\33[?25l" + ("\n\n\n\n\n\33[5A" if self._display_sub_progress else "\n\n\33[2A"))
        now = time.perf_counter()
        self._start_time = now
        self._segment_starts[0] = now
        self._running = True
        self._stop.clear()
        self._thread = threading.Thread(target=self._render_loop, name="ProgressBar", daemon=True)
        self._thread.start()

    def finish(self, blocking: bool = False) -> None:
        """Stop redrawing, draw a full bar and restore the cursor."""
        if not self.initialized or not self._running:
            return
        self._running = False
        self._stop.set()
        if blocking and self._thread is not None:
            self._thread.join()
        self.render(1.0)
        self._stream.write("\33[?25h\n\n\n" + ("\n\n\n" if self._display_sub_progress else ""))
        self._stream.flush()

    def update_progress(self, segment: int, progress: float) -> None:
        """Set the fraction done of ``segment``, clamped to [0, 1]."""
        if not self.initialized:
            return
        if self._active != segment:
            self._active = segment
            self._segment_starts[segment] = time.perf_counter()
        if math.isnan(progress):
            progress = 1.0
        with self._lock:
            self._progress[segment] = max(0.0, min(1.0, progress))

    def update_work(self, segment: int, done: int, total: int) -> None:
        """Set the progress of ``segment`` as ``done`` out of ``total`` units."""
        self.update_progress(segment, done / total if total else 1.0)

    def total_progress(self) -> float:
        """Weighted progress over all segments."""
        if not self._total_weight:
            return 0.0
        with self._lock:
            return sum(
                s.weight / self._total_weight * p for s, p in zip(self._segments, self._progress)
            )

    def render(self, progress: float) -> None:
        """Draw the bar (and the active segment's bar) for ``progress``."""
        if not self.initialized:
            return
        now = time.perf_counter()
        elapsed = now - self._start_time
        width = console_width()
        active = self._segments[self._active]
        title = "Total" if self._display_sub_progress else active.title
        parts = [
            "\33[s\33[K",
            center_string(width, f"===== {title} ====="),
            "\n",
            *self._bar_lines(progress, width),
            "\33[KTime elapsed: ",
            format_duration(elapsed),
            "\tTime remaining: ",
            format_duration(_remaining(progress, elapsed)),
        ]
        if self._extra_data is not None:
            parts += ["\t", self._extra_data(progress)]
        if self._display_sub_progress:
            with self._lock:
                segment_progress = self._progress[self._active]
            segment_elapsed = now - self._segment_starts[self._active]
            parts += [
                "\n\33[K",
                center_string(width, f"===== {active.title} ====="),
                "\n",
                *self._bar_lines(segment_progress, width),
                "\33[KTime elapsed: ",
                format_duration(segment_elapsed),
                "\tTime remaining: ",
                format_duration(_remaining(segment_progress, elapsed)),
            ]
            if active.extra_data is not None:
                parts += ["\t", active.extra_data(progress)]
        parts.append("\33[u")
        with self._render_lock:
            self._stream.write("".join(parts))
            self._stream.flush()

    def __enter__(self) -> ProgressBar:
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.finish(True)

    @staticmethod
    def _bar_lines(progress: float, width: int) -> list[str]:
        text = percent_string(progress, width)
        split = int(width * progress)
        return ["\33[K\33[7m", text[:split], "\33[0m", text[split:], "\n"]

    def _render_loop(self) -> None:
        while not self._stop.wait(_REFRESH_SECONDS):
            progress = self.total_progress()
            if progress == 1.0:
                return
            self.render(progress)


def _remaining(progress: float, elapsed: float) -> float:
    if progress <= 0.0:
        return math.inf
    return (1.0 / progress - 1.0) * elapsed