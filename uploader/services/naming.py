"""Destination filename generation.

Stored files are named after the moment they are processed. A pattern that
contains ``%`` is handed to ``strftime``; any other pattern is read as a
reference-time layout in which the parts of ``Mon Jan 2 15:04:05 2006``
stand for the matching parts of the current time, e.g. ``20060102150405``
renders as ``20240101120000``.
"""

import re
from collections.abc import Callable
from datetime import datetime
from typing import Protocol

Clock = Callable[[], datetime]

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _hour12(t: datetime) -> int:
    return t.hour % 12 or 12


# Longest tokens first so "2006" wins over "2" and "January" over "Jan".
_LAYOUT_TOKENS: tuple[tuple[str, Callable[[datetime], str]], ...] = (
    ("January", lambda t: _MONTHS[t.month - 1]),
    ("Monday", lambda t: _WEEKDAYS[t.weekday()]),
    ("_2006", lambda t: f"_{t.year:04d}"),
    ("2006", lambda t: f"{t.year:04d}"),
    ("Jan", lambda t: _MONTHS[t.month - 1][:3]),
    ("Mon", lambda t: _WEEKDAYS[t.weekday()][:3]),
    ("_2", lambda t: f"{t.day:>2d}"),
    ("15", lambda t: f"{t.hour:02d}"),
    ("01", lambda t: f"{t.month:02d}"),
    ("02", lambda t: f"{t.day:02d}"),
    ("03", lambda t: f"{_hour12(t):02d}"),
    ("04", lambda t: f"{t.minute:02d}"),
    ("05", lambda t: f"{t.second:02d}"),
    ("06", lambda t: f"{t.year % 100:02d}"),
    ("PM", lambda t: "PM" if t.hour >= 12 else "AM"),
    ("pm", lambda t: "pm" if t.hour >= 12 else "am"),
    ("1", lambda t: str(t.month)),
    ("2", lambda t: str(t.day)),
    ("3", lambda t: str(_hour12(t))),
    ("4", lambda t: str(t.minute)),
    ("5", lambda t: str(t.second)),
)

_FRACTION = re.compile(r"\.(0{1,9})(?![0-9])")


def format_layout(layout: str, moment: datetime) -> str:
    """Render ``moment`` using a reference-time layout."""
    out: list[str] = []
    i = 0
    while i < len(layout):
        fraction = _FRACTION.match(layout, i)
        if fraction:
            digits = len(fraction.group(1))
            nanos = f"{moment.microsecond:06d}000"
            out.append("." + nanos[:digits])
            i = fraction.end()
            continue
        for token, render in _LAYOUT_TOKENS:
            if layout.startswith(token, i):
                out.append(render(moment))
                i += len(token)
                break
        else:
            out.append(layout[i])
            i += 1
    return "".join(out)


def format_time(pattern: str, moment: datetime) -> str:
    """Render ``moment`` with either a strftime format or a reference layout."""
    if "%" in pattern:
        return moment.strftime(pattern)
    return format_layout(pattern, moment)


class NameGenerator(Protocol):
    """Produces the stored filename for an accepted upload."""

    def generate(self, extension: str) -> str: ...


class TimestampNameGenerator:
    """Names files after the current time.

    Two files processed within the pattern's resolution get the same name and
    the later one overwrites the earlier one on disk.
    """

    def __init__(self, pattern: str, clock: Clock = datetime.now) -> None:
        self._pattern = pattern
        self._clock = clock

    @property
    def pattern(self) -> str:
        return self._pattern

    def generate(self, extension: str) -> str:
        return format_time(self._pattern, self._clock()) + extension
