"""
Content placement - choose the spawn point and the exit for a generated grid.
"""

import logging
import random
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from .distances import distances, farthest_cell
from .grid import Cell, Grid

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass(frozen=True)
class PlacementResult:
    """
    Placement record handed to the game runtime, once per level.

    Attributes:
        spawn: (row, column) of the player spawn
        exit: (row, column) of the exit
        seed: Level seed the grid was generated from
        algorithm: Value of the generation algorithm used
        distance: Hops from spawn to exit along passages
    """
    spawn: Position
    exit: Position
    seed: Optional[int] = None
    algorithm: Optional[str] = None
    distance: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['spawn'] = list(self.spawn)
        data['exit'] = list(self.exit)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlacementResult":
        return cls(
            spawn=tuple(data['spawn']),
            exit=tuple(data['exit']),
            seed=data.get('seed'),
            algorithm=data.get('algorithm'),
            distance=data.get('distance', 0),
        )


def find_spawn_cell(grid: Grid, preferred: Position = (0, 0)) -> Cell:
    """
    The preferred cell if it is Floor, otherwise the nearest Floor cell.

    Nearest is by Manhattan distance with ties in row-major order. When the
    grid has no Floor cell at all, the preferred cell (clamped to the grid) is
    returned.
    """
    row = min(max(preferred[0], 0), grid.rows - 1)
    column = min(max(preferred[1], 0), grid.columns - 1)
    origin = grid.cell_at(row, column)

    if origin.is_floor:
        return origin

    floors = grid.floor_cells()
    if not floors:
        return origin
    # min() keeps the first of equal keys, and floor_cells() is row-major
    return min(floors, key=lambda c: abs(c.row - row) + abs(c.column - column))


def place_spawn_and_exit(grid: Grid, rng: random.Random, spawn: Position = (0, 0),
                         seed: Optional[int] = None, algorithm: Optional[str] = None) -> PlacementResult:
    """
    Pick a spawn cell and put the exit as far from it as the passages allow.

    Args:
        grid: Classified grid
        rng: Seeded random source, used only when the farthest cell is the spawn itself
        spawn: Preferred spawn position
        seed: Level seed recorded on the result
        algorithm: Algorithm name recorded on the result

    Returns:
        PlacementResult
    """
    spawn_cell = find_spawn_cell(grid, spawn)
    spawn_distances = distances(grid, spawn_cell)
    exit_cell = farthest_cell(spawn_distances)

    if exit_cell is spawn_cell:
        others = [c for c in grid.floor_cells() if c is not spawn_cell]
        if others:
            exit_cell = rng.choice(others)
            logger.debug("Farthest cell was the spawn; picked random exit %s", exit_cell.position)
        else:
            logger.debug("Single-cell level; exit shares the spawn cell %s", spawn_cell.position)

    result = PlacementResult(
        spawn=spawn_cell.position,
        exit=exit_cell.position,
        seed=seed,
        algorithm=algorithm,
        distance=spawn_distances.get(exit_cell, 0),
    )
    logger.info("Spawn at %s, exit at %s (%d steps)", result.spawn, result.exit, result.distance)
    return result
