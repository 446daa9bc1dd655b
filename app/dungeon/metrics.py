from typing import TYPE_CHECKING, Any, Dict

from .connectivity import component_sizes, count_components
from .pruning import find_dead_ends
from .tiles import Material

if TYPE_CHECKING:
    from .dungeon import Dungeon


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'rooms_attempted': 0,
        'rooms_placed': 0,
        'rooms_rejected': 0,
        'maze_regions': 0,
        'tunnels_carved': 0,
        'edges_found': 0,
        'doors_primary': 0,
        'doors_residual': 0,
        'doors_repair': 0,
        'tiles_trimmed': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }


def analyze(dungeon: "Dungeon") -> Dict[str, Any]:
    """Structural diagnostics for a finished dungeon.

    ``region_violations`` lists tiles breaking the wall <=> region 0 rule,
    ``dead_ends`` lists corridor/door tiles with three or more wall neighbors.
    Both should be empty for anything the pipeline produced.
    """
    violations = [
        (x, y)
        for x, y in dungeon.coords()
        if (dungeon.tiles[y][x].material == Material.WALL) != (dungeon.tiles[y][x].region == 0)
    ]
    return {
        'tiles': {m.name.lower(): dungeon.count(m) for m in Material},
        'rooms': len(dungeon.rooms),
        'rooms_without_edges': sum(1 for r in dungeon.rooms if not r.edges),
        'components': count_components(dungeon),
        'floor_components': count_components(dungeon, floor_only=True),
        'component_sizes': component_sizes(dungeon),
        'dead_ends': find_dead_ends(dungeon),
        'region_violations': violations,
    }


__all__ = ["init_metrics", "analyze"]
