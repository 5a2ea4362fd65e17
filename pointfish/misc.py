"""Engine identification, debug statistics, I/O logging and small string/file helpers."""

from __future__ import annotations

import atexit
import math
import os
import re
import sys
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, TextIO

__all__ = [
    "DebugStats",
    "IOLogger",
    "start_logger",
    "engine_version_info",
    "engine_info",
    "remove_whitespace",
    "is_whitespace",
    "str_to_size_t",
    "read_file_to_string",
    "get_binary_directory",
    "get_working_directory",
]

VERSION = "dev"
ENGINE_NAME = "Pointfish"
MAX_DEBUG_SLOTS = 32

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_SIZE_MAX = (1 << 64) - 1
_C_WHITESPACE = frozenset(" \t\n\v\f\r")


# ---------------------------------------------------------------------------
# Engine identification
# ---------------------------------------------------------------------------


def engine_version_info() -> str:
    """Return the full engine name with its version.

    Development versions carry the build date and a commit marker, e.g.
    ``Pointfish dev-20250101-nogit``; releases carry only the version.
    """
    text = f"{ENGINE_NAME} {VERSION}"
    if VERSION == "dev":
        text += f"-{date.today():%Y%m%d}-nogit"
    return text


def engine_info(to_uci: bool = False) -> str:
    """Return the identification line, in UCI form when ``to_uci`` is true."""
    joiner = "\nid author " if to_uci else " by "
    return f"{engine_version_info()}{joiner}the {ENGINE_NAME} developers"


# ---------------------------------------------------------------------------
# Debug statistics
# ---------------------------------------------------------------------------


def _fmt(x: float) -> str:
    return format(x, "g")


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0 else math.nan


def _div(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * (math.copysign(1.0, b))
    return a / b


@dataclass
class _Extremes:
    total: int = 0
    maximum: int = _INT64_MIN
    minimum: int = _INT64_MAX


@dataclass
class _Correl:
    total: int = 0
    sum1: int = 0
    sum1_sq: int = 0
    sum2: int = 0
    sum2_sq: int = 0
    sum12: int = 0


@dataclass
class _Moments:
    total: int = 0
    total_sum: int = 0
    total_sq: int = 0


@dataclass
class _Slots:
    hits: List[List[int]] = field(default_factory=lambda: [[0, 0] for _ in range(MAX_DEBUG_SLOTS)])
    means: List[List[int]] = field(default_factory=lambda: [[0, 0] for _ in range(MAX_DEBUG_SLOTS)])
    stdevs: List[_Moments] = field(default_factory=lambda: [_Moments() for _ in range(MAX_DEBUG_SLOTS)])
    extremes: List[_Extremes] = field(default_factory=lambda: [_Extremes() for _ in range(MAX_DEBUG_SLOTS)])
    correls: List[_Correl] = field(default_factory=lambda: [_Correl() for _ in range(MAX_DEBUG_SLOTS)])


class DebugStats:
    """Run-time statistics collected in numbered slots (0 to 31)."""

    def __init__(self) -> None:
        self._slots = _Slots()

    @staticmethod
    def _check(slot: int) -> int:
        if not 0 <= slot < MAX_DEBUG_SLOTS:
            raise IndexError(f"debug slot {slot} out of range")
        return slot

    def hit_on(self, cond: bool, slot: int = 0) -> None:
        """Count one event, and one hit if ``cond`` holds."""
        entry = self._slots.hits[self._check(slot)]
        entry[0] += 1
        if cond:
            entry[1] += 1

    def mean_of(self, value: int, slot: int = 0) -> None:
        """Add ``value`` to the running mean of ``slot``."""
        entry = self._slots.means[self._check(slot)]
        entry[0] += 1
        entry[1] += value

    def stdev_of(self, value: int, slot: int = 0) -> None:
        """Add ``value`` to the running standard deviation of ``slot``."""
        entry = self._slots.stdevs[self._check(slot)]
        entry.total += 1
        entry.total_sum += value
        entry.total_sq += value * value

    def extremes_of(self, value: int, slot: int = 0) -> None:
        """Track the minimum and maximum of the values seen in ``slot``."""
        entry = self._slots.extremes[self._check(slot)]
        entry.total += 1
        entry.maximum = max(entry.maximum, value)
        entry.minimum = min(entry.minimum, value)

    def correl_of(self, value1: int, value2: int, slot: int = 0) -> None:
        """Add a pair of values to the correlation of ``slot``."""
        entry = self._slots.correls[self._check(slot)]
        entry.total += 1
        entry.sum1 += value1
        entry.sum1_sq += value1 * value1
        entry.sum2 += value2
        entry.sum2_sq += value2 * value2
        entry.sum12 += value1 * value2

    def report(self) -> str:
        """Return a report of every slot that has collected data."""
        lines: List[str] = []

        for i, (n, hits) in enumerate(self._slots.hits):
            if n:
                lines.append(
                    f"Hit #{i}: Total {n} Hits {hits} Hit Rate (%) {_fmt(100.0 * hits / n)}"
                )

        for i, (n, total) in enumerate(self._slots.means):
            if n:
                lines.append(f"Mean #{i}: Total {n} Mean {_fmt(total / n)}")

        for i, m in enumerate(self._slots.stdevs):
            if m.total:
                n = m.total
                r = _sqrt(m.total_sq / n - (m.total_sum / n) ** 2)
                lines.append(f"Stdev #{i}: Total {n} Stdev {_fmt(r)}")

        for i, e in enumerate(self._slots.extremes):
            if e.total:
                lines.append(
                    f"Extremity #{i}: Total {e.total} Min {e.minimum} Max {e.maximum}"
                )

        for i, c in enumerate(self._slots.correls):
            if c.total:
                n = c.total
                mean1, mean2 = c.sum1 / n, c.sum2 / n
                numerator = c.sum12 / n - mean1 * mean2
                denominator = _sqrt(c.sum1_sq / n - mean1 * mean1) * _sqrt(
                    c.sum2_sq / n - mean2 * mean2
                )
                r = _div(numerator, denominator)
                lines.append(f"Correl. #{i}: Total {n} Coefficient {_fmt(r)}")

        return "".join(line + "\n" for line in lines)

    def clear(self) -> None:
        """Reset every slot."""
        self._slots = _Slots()


# ---------------------------------------------------------------------------
# I/O logging
# ---------------------------------------------------------------------------


class _Tee:
    """Stream wrapper that copies everything passing through it to a log."""

    def __init__(self, stream: TextIO, logger: "IOLogger", prefix: str) -> None:
        self._stream = stream
        self._logger = logger
        self._prefix = prefix

    @property
    def wrapped(self) -> TextIO:
        return self._stream

    def write(self, text: str) -> int:
        written = self._stream.write(text)
        self._logger._log(text, self._prefix)
        return written

    def writelines(self, lines) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        self._logger._flush()
        self._stream.flush()

    def read(self, size: int = -1) -> str:
        text = self._stream.read(size)
        self._logger._log(text, self._prefix)
        return text

    def readline(self, size: int = -1) -> str:
        text = self._stream.readline(size)
        self._logger._log(text, self._prefix)
        return text

    def __iter__(self):
        return self

    def __next__(self) -> str:
        line = self.readline()
        if not line:
            raise StopIteration
        return line

    def __getattr__(self, name: str):
        return getattr(self._stream, name)


class IOLogger:
    """Copies standard input and output to a log file while it is active.

    Output lines are prefixed with ``<< `` and input lines with ``>> ``.
    """

    def __init__(self) -> None:
        self._file: Optional[TextIO] = None
        self._orig_stdin: Optional[TextIO] = None
        self._orig_stdout: Optional[TextIO] = None
        self._last = "\n"

    @property
    def active(self) -> bool:
        return self._file is not None

    def _log(self, text: str, prefix: str) -> None:
        if self._file is None or not text:
            return
        parts = []
        for ch in text:
            if self._last == "\n":
                parts.append(prefix)
            parts.append(ch)
            self._last = ch
        self._file.write("".join(parts))

    def _flush(self) -> None:
        if self._file is not None:
            self._file.flush()

    def start(self, fname: str) -> None:
        """Start logging to ``fname``; an empty name only stops logging."""
        if self._file is not None:
            sys.stdout = self._orig_stdout  # type: ignore[assignment]
            sys.stdin = self._orig_stdin  # type: ignore[assignment]
            self._file.close()
            self._file = None
            self._orig_stdin = self._orig_stdout = None

        if fname:
            try:
                self._file = open(fname, "w", encoding="utf-8")
            except OSError as exc:
                raise OSError(f"Unable to open debug log file {fname}") from exc
            self._orig_stdin = sys.stdin
            self._orig_stdout = sys.stdout
            sys.stdin = _Tee(sys.stdin, self, ">> ")  # type: ignore[assignment]
            sys.stdout = _Tee(sys.stdout, self, "<< ")  # type: ignore[assignment]

    def stop(self) -> None:
        """Stop logging and restore the original streams."""
        self.start("")


_LOGGER = IOLogger()
atexit.register(_LOGGER.stop)


def start_logger(fname: str) -> None:
    """Start (or, with an empty name, stop) the process-wide I/O log."""
    _LOGGER.start(fname)


# ---------------------------------------------------------------------------
# String and file helpers
# ---------------------------------------------------------------------------


def remove_whitespace(s: str) -> str:
    """Return ``s`` with all ASCII whitespace removed."""
    return "".join(ch for ch in s if ch not in _C_WHITESPACE)


def is_whitespace(s: str) -> bool:
    """Return True if ``s`` holds only ASCII whitespace (or is empty)."""
    return all(ch in _C_WHITESPACE for ch in s)


_UINT_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?)(\d+)")


def str_to_size_t(s: str) -> int:
    """Parse the leading unsigned decimal number of ``s``.

    Raises ValueError if no number is found and OverflowError if it does not
    fit in 64 bits. A leading minus sign wraps modulo 2**64.
    """
    match = _UINT_RE.match(s)
    if match is None:
        raise ValueError(f"invalid size value: {s!r}")
    value = int(match.group(2))
    if value > _SIZE_MAX:
        raise OverflowError(f"size value out of range: {s!r}")
    if match.group(1) == "-":
        value = (-value) & _SIZE_MAX
    return value


def read_file_to_string(path: str) -> Optional[bytes]:
    """Return the raw contents of ``path``, or None if it cannot be opened."""
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError:
        return None


def get_working_directory() -> str:
    """Return the current working directory, or an empty string on failure."""
    try:
        return os.getcwd()
    except OSError:
        return ""


def get_binary_directory(argv0: str) -> str:
    """Return the directory of the program named by ``argv0``, with a trailing separator.

    A bare name gives the working directory; a leading ``./`` is replaced by it.
    """
    separator = "\\" if os.name == "nt" else "/"
    working_directory = get_working_directory()

    pos = max(argv0.rfind("\\"), argv0.rfind("/"))
    binary_directory = "." + separator if pos < 0 else argv0[: pos + 1]

    if binary_directory.startswith("." + separator):
        binary_directory = working_directory + binary_directory[1:]

    return binary_directory