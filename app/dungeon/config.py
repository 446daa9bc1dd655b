"""Generation parameters and the request clamp policy.

The core trusts the numbers it is handed; anything arriving from a query
string or the command line goes through :meth:`DungeonConfig.from_params`
first so grid size (and with it runtime) stays bounded.
"""

from __future__ import annotations

import hashlib
import random
from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional

SEED_MAX_INT = 9223372036854775807

GRID_SIZE_RANGE = (20, 1000)
ROOM_ATTEMPTS_RANGE = (1, 100_000)
PIXEL_SIZE_RANGE = (1, 20)


@dataclass
class DungeonConfig:
    width: int = 50
    height: int = 50
    room_attempts: int = 200
    min_room_size: int = 5
    max_room_size: int = 15
    pixel_size: int = 10
    seed: Optional[int] = None
    strict_connectivity: bool = False

    @property
    def max_allowed_room_size(self) -> int:
        return min(self.width, self.height) - 2

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "DungeonConfig":
        """Build a config from loosely typed request parameters.

        Accepts both the camelCase query names used by the HTTP endpoint
        (``dungeonWidth``, ``roomAttempts`` ...) and the snake_case field
        names. Missing or unparsable values fall back to the defaults; parsed
        values are clamped into their allowed range.
        """
        defaults = cls()

        def pick(*names):
            for n in names:
                if n in params and params[n] is not None:
                    return params[n]
            return None

        width = clamp_int(pick("dungeonWidth", "width"), defaults.width, *GRID_SIZE_RANGE)
        height = clamp_int(pick("dungeonHeight", "height"), defaults.height, *GRID_SIZE_RANGE)
        bound = min(width, height) - 2
        room_attempts = clamp_int(
            pick("roomAttempts", "room_attempts"), defaults.room_attempts, *ROOM_ATTEMPTS_RANGE
        )
        min_room_size = clamp_int(pick("minRoomSize", "min_room_size"), defaults.min_room_size, 1, bound - 1)
        max_room_size = clamp_int(
            pick("maxRoomSize", "max_room_size"), max(defaults.max_room_size, min_room_size + 1), min_room_size + 1, bound
        )
        pixel_size = clamp_int(pick("pixelSize", "pixel_size"), defaults.pixel_size, *PIXEL_SIZE_RANGE)
        raw_seed = pick("seed")
        return cls(
            width=width,
            height=height,
            room_attempts=room_attempts,
            min_room_size=min_room_size,
            max_room_size=max_room_size,
            pixel_size=pixel_size,
            seed=coerce_seed(raw_seed) if raw_seed is not None else None,
            strict_connectivity=parse_flag(pick("strict", "strict_connectivity"), defaults.strict_connectivity),
        )


def clamp_int(value: Any, default: int, lo: int, hi: int) -> int:
    """Parse ``value`` as an int and clamp it to ``[lo, hi]``.

    ``None``, empty strings and unparsable values yield ``default`` (itself
    clamped, so a default outside a narrowed range is pulled back in).
    """
    parsed = default
    if value is not None and not (isinstance(value, str) and not value.strip()):
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            parsed = default
    return max(lo, min(hi, parsed))


def parse_flag(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _bounded(value: int) -> int:
    # Values inside the signed 64-bit range are kept as given
    if -SEED_MAX_INT - 1 <= value <= SEED_MAX_INT:
        return value
    return value % SEED_MAX_INT


def coerce_seed(payload_seed):
    """Convert provided seed (int or str) into bounded 64-bit signed int."""
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, bool):
        return int(payload_seed)
    if isinstance(payload_seed, int):
        return _bounded(payload_seed)
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.lstrip("-").isdecimal() and s.count("-") <= 1:
            return _bounded(int(s))
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX_INT
    # Fallback
    return random.randint(1, 1_000_000)


__all__ = ["DungeonConfig", "clamp_int", "coerce_seed", "parse_flag"]
