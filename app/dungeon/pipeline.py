"""Pipeline orchestration for dungeon generation.

``generate`` is the one entry point of the core. It threads a single
Dungeon through the six generation phases in fixed order, all drawing from
one ``random.Random`` seeded per call, so the same seed and parameters
always give the same grid:

    create_empty_dungeon -> place_rooms -> carve_maze -> identify_edges
        -> connect_regions -> trim_tunnels
"""
from __future__ import annotations

import random
import time
from typing import Optional

from ..logging_utils import get_logger
from .config import DungeonConfig
from .connectivity import connect_regions
from .dungeon import Dungeon, create_empty_dungeon
from .metrics import init_metrics
from .pruning import trim_tunnels
from .rooms import identify_edges, place_rooms
from .tunnels import carve_maze

log = get_logger("dungeon.pipeline")


def generate(
    width: int,
    height: int,
    room_attempts: int,
    min_room_size: int,
    max_room_size: int,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    strict_connectivity: bool = False,
    enable_metrics: bool = True,
) -> Dungeon:
    """Generate a dungeon.

    Either pass ``seed`` (``None`` picks one at random and records it on
    ``dungeon.seed``) or an already seeded ``rng``. ``strict_connectivity``
    adds the union-find repair pass after the two regular connection passes.
    """
    if min_room_size < 1 or min_room_size >= max_room_size:
        raise ValueError(f"room sizes must satisfy 1 <= min < max, got {min_room_size}..{max_room_size}")
    if room_attempts < 0:
        raise ValueError(f"room_attempts must be >= 0, got {room_attempts}")
    if rng is None:
        # Preserve seed semantics: 0 is valid deterministic seed; None => random
        if seed is None:
            seed = random.randint(1, 1_000_000)
        rng = random.Random(seed)

    if enable_metrics:
        start = time.perf_counter()
        phase_times = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
            phase_times[label] = round((pe - ps) * 1000, 3)
            log.debug(event="phase", phase=label, ms=phase_times[label])
            return r
    else:
        def _phase(label, fn, *a, **k):
            return fn(*a, **k)

    dungeon = _phase('init_grid', create_empty_dungeon, width, height)
    dungeon.seed = seed
    if enable_metrics:
        dungeon.metrics = init_metrics()
    dungeon = _phase('place_rooms', place_rooms, dungeon, min_room_size, max_room_size, room_attempts, rng)
    dungeon = _phase('carve_maze', carve_maze, dungeon, rng)
    dungeon = _phase('identify_edges', identify_edges, dungeon)
    dungeon = _phase('connect_regions', connect_regions, dungeon, rng, strict=strict_connectivity)
    dungeon = _phase('trim_tunnels', trim_tunnels, dungeon)

    if enable_metrics:
        dungeon.metrics['runtime_ms'] = round((time.perf_counter() - start) * 1000, 3)
        dungeon.metrics['phase_ms'] = phase_times
    log.info(
        event="dungeon_generated",
        seed=seed,
        width=width,
        height=height,
        rooms=len(dungeon.rooms),
        regions=dungeon.num_regions,
        strict=strict_connectivity,
        runtime_ms=dungeon.metrics.get('runtime_ms'),
    )
    return dungeon


def generate_from_config(config: DungeonConfig, *, enable_metrics: bool = True) -> Dungeon:
    return generate(
        config.width,
        config.height,
        config.room_attempts,
        config.min_room_size,
        config.max_room_size,
        seed=config.seed,
        strict_connectivity=config.strict_connectivity,
        enable_metrics=enable_metrics,
    )


__all__ = ["generate", "generate_from_config"]
