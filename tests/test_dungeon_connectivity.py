"""Connectivity of generated dungeons.

The two regular connection passes track linked regions with a plain set, so
a few layouts may keep some rooms unreachable. Those seeds are reported as
warnings, but they must stay rare: at most a tenth of the sample. The strict
repair pass must never do worse than the regular passes on the same seed.
"""

import warnings

from app.dungeon import generate
from app.dungeon import pipeline
from app.dungeon.connectivity import count_components

from dungeon_test_utils import TYPICAL_PARAMS, floor_component_count

SEEDS = range(1000, 1100)
MAX_DISCONNECTED = len(SEEDS) // 10


def _disconnected_seeds(seeds, **kwargs):
    found = []
    for s in seeds:
        d = generate(*TYPICAL_PARAMS, seed=s, enable_metrics=False, **kwargs)
        floors = count_components(d, floor_only=True)
        assert floors == floor_component_count(d.material_grid())
        assert floors <= max(1, len(d.rooms))
        if floors > 1:
            found.append((s, floors))
    return found


def test_connectivity_over_seed_sample():
    disconnected = _disconnected_seeds(SEEDS)
    if disconnected:
        warnings.warn(
            f"{len(disconnected)}/{len(SEEDS)} seeds left rooms unreachable: {disconnected[:10]}",
            stacklevel=1,
        )
    assert len(disconnected) <= MAX_DISCONNECTED, disconnected


def test_sample_check_catches_missing_doors(monkeypatch):
    # With no doors at all every multi-room layout is split
    monkeypatch.setattr(pipeline, "connect_regions", lambda d, rng, strict=False: d)
    seeds = range(1000, 1020)
    assert len(_disconnected_seeds(seeds)) > len(seeds) // 10


def test_strict_repair_never_worse():
    disconnected = []
    for s in SEEDS:
        loose = generate(*TYPICAL_PARAMS, seed=s, enable_metrics=False)
        strict = generate(*TYPICAL_PARAMS, seed=s, strict_connectivity=True)
        loose_floors = count_components(loose, floor_only=True)
        strict_floors = count_components(strict, floor_only=True)
        assert strict_floors <= loose_floors, f"seed {s}: strict {strict_floors} > loose {loose_floors}"
        # Same draws up to the repair pass: rooms are identical
        assert [(r.x, r.y, r.w, r.h) for r in strict.rooms] == [(r.x, r.y, r.w, r.h) for r in loose.rooms]
        if strict_floors > 1:
            disconnected.append((s, strict_floors))
    if disconnected:
        warnings.warn(f"strict repair left {len(disconnected)} seeds split: {disconnected[:10]}", stacklevel=1)
    assert len(disconnected) <= MAX_DISCONNECTED, disconnected


def test_trimming_keeps_rooms_linked():
    # Every door that survives trimming still has open tiles on two sides
    d = generate(*TYPICAL_PARAMS, seed=42)
    for x, y in d.coords():
        if d.tiles[y][x].material == 2:
            open_sides = sum(1 for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)) if d.tiles[y + dy][x + dx].material != 0)
            assert open_sides >= 2
