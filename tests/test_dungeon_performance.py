import time
import pytest
from app.dungeon import generate

# Simple performance guardrail. Not a strict micro-benchmark; aims to catch large regressions.
# Adjust thresholds if CI hardware differs significantly.

@pytest.mark.performance
def test_dungeon_generation_medium_seeds():
    seeds = [10101, 20202, 30303]
    max_seconds_per = 2.0  # generous threshold; tune as needed
    timings = []
    for s in seeds:
        start = time.perf_counter()
        d = generate(100, 100, 500, 5, 15, seed=s, enable_metrics=False)
        elapsed = time.perf_counter() - start
        timings.append(elapsed)
        assert d.rooms
        assert elapsed < max_seconds_per, f"Seed {s} took {elapsed:.3f}s (> {max_seconds_per}s)"
    avg = sum(timings)/len(timings)
    assert avg < max_seconds_per * 0.85, f"Average generation {avg:.3f}s too high"


@pytest.mark.performance
def test_large_grid_completes():
    # Deep corridors must not hit the recursion limit
    d = generate(400, 400, 2000, 5, 15, seed=3, enable_metrics=False)
    assert d.size == (400, 400)
