"""Configuration for a Tower of Hanoi game session.

The only externally supplied setting that matters to the engine is the
number of disks. It usually arrives as text from an input widget or the
command line, so this module turns arbitrary input into a usable count:
absent or non-numeric input falls back to `DEFAULT_DISK_COUNT` and anything
numeric is clamped into `[MIN_DISKS, MAX_DISKS]`. Nothing here ever rejects
a disk count.

The primary components are:

- `GameConfig`: A data class holding the disk count and the auto-solve
  playback cadence.
- `clamp_disk_count` / `parse_disk_count`: normalisation helpers used by
  `PuzzleState.reset` and by the orchestrator's "new game" trigger.
"""
import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

MIN_DISKS = 1
MAX_DISKS = 15
DEFAULT_DISK_COUNT = 3
DEFAULT_MOVE_INTERVAL = 0.6  # seconds between auto-solve moves

# Leading integer portion, the same prefix a browser's parseInt() would honour.
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def clamp_disk_count(disk_count: int) -> int:
    """Clamps a disk count into the supported range `[MIN_DISKS, MAX_DISKS]`.

    Args:
        disk_count (int): Any integer.

    Returns:
        int: The nearest supported disk count.
    """
    return max(MIN_DISKS, min(MAX_DISKS, int(disk_count)))


def parse_disk_count(raw: Any, default: int = DEFAULT_DISK_COUNT) -> int:
    """Turns raw external input into a valid disk count.

    Accepted inputs are integers, numeric strings (leading whitespace and
    trailing garbage are tolerated, so `"7 disks"` gives 7) and `None`.
    Anything that does not yield an integer falls back to `default`.
    The result is always clamped.

    Args:
        raw (Any): The value supplied by the user or another external source.
        default (int): The count used when `raw` is absent or non-numeric.

    Returns:
        int: A disk count within `[MIN_DISKS, MAX_DISKS]`.

    Example:
        >>> parse_disk_count("20")
        15
        >>> parse_disk_count("abc")
        3
    """
    value: Optional[int] = None
    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if math.isfinite(raw):
            value = int(raw)
    elif isinstance(raw, str):
        match = _LEADING_INT_RE.match(raw)
        if match:
            value = int(match.group(1))
    if value is None:
        value = default
    return clamp_disk_count(value)


@dataclass
class GameConfig:
    """Data class holding the settings for one game session.

    Attributes:
        disk_count (int): Number of disks on the starting peg. Normalised with
            `parse_disk_count` when the config is created, so text and
            out-of-range values are accepted and clamped.
        move_interval (float): Seconds between two auto-solve moves. Must be
            positive.
    """
    disk_count: int = DEFAULT_DISK_COUNT
    move_interval: float = DEFAULT_MOVE_INTERVAL

    def __post_init__(self):
        self.disk_count = parse_disk_count(self.disk_count)
        if isinstance(self.move_interval, bool) or not isinstance(self.move_interval, (int, float)) \
                or self.move_interval <= 0:
            raise ValueError("The move interval must be a positive number of seconds.")
        self.move_interval = float(self.move_interval)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "GameConfig":
        """Builds a config from a plain mapping, ignoring unknown keys.

        Raises:
            ValueError: If `move_interval` is present but not a positive number.
        """
        kwargs = {}
        if "disk_count" in mapping:
            kwargs["disk_count"] = mapping["disk_count"]
        if "move_interval" in mapping:
            kwargs["move_interval"] = mapping["move_interval"]
        return cls(**kwargs)
