"""
Generation Algorithms - Binary Tree, Aldous-Broder, Recursive Backtracker and
Recursive Division maze carving over a Grid
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple, Union

from .errors import GenerationFailed
from .grid import Direction, Grid

logger = logging.getLogger(__name__)


class MazeAlgorithm:
    """
    Base strategy: populate a grid's links from a seeded random source.

    Subclasses implement generate(grid, rng). They only mutate links; tile
    classification is done by the caller once generate() returns.
    """

    algorithm: "Algorithm"

    @property
    def perfect(self) -> bool:
        """True when the result is always a spanning tree."""
        return True

    def generate(self, grid: Grid, rng: random.Random) -> Grid:
        raise NotImplementedError(f"{type(self).__name__} must implement generate()")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class BinaryTree(MazeAlgorithm):
    """
    Link every cell north or east.

    The north-east corner is reachable from everywhere and no cell ever links
    south or west, which gives long straight corridors along the north row and
    east column.
    """

    def generate(self, grid: Grid, rng: random.Random) -> Grid:
        for cell in grid.each_cell():
            north = grid.neighbor(cell, Direction.NORTH)
            east = grid.neighbor(cell, Direction.EAST)

            if north is not None and east is not None:
                target = north if rng.randrange(2) == 0 else east
            else:
                target = north or east

            if target is not None:
                grid.link(cell, target)
        return grid


class AldousBroder(MazeAlgorithm):
    """
    Random walk that links each cell the first time it is entered.

    Produces a uniformly random spanning tree. The walk has no hard upper
    bound, so callers working on large grids should pass max_steps.
    """

    def __init__(self, max_steps: Optional[int] = None):
        self.max_steps = max_steps
        self.steps_taken = 0

    def generate(self, grid: Grid, rng: random.Random) -> Grid:
        cell = grid.random_cell(rng)
        unvisited = grid.size - 1
        steps = 0

        while unvisited > 0:
            if self.max_steps is not None and steps >= self.max_steps:
                self.steps_taken = steps
                raise GenerationFailed(
                    f"Aldous-Broder exceeded {self.max_steps} steps with {unvisited} cells unvisited"
                )
            neighbor = rng.choice(grid.neighbors(cell))
            if neighbor.link_count == 0:
                grid.link(cell, neighbor)
                unvisited -= 1
            cell = neighbor
            steps += 1

        self.steps_taken = steps
        logger.debug("Aldous-Broder finished after %d steps on %dx%d grid", steps, grid.rows, grid.columns)
        return grid

    def __repr__(self) -> str:
        return f"AldousBroder(max_steps={self.max_steps})"


class RecursiveBacktracker(MazeAlgorithm):
    """Depth-first carving with an explicit stack; long corridors, few dead ends."""

    def __init__(self):
        self.max_stack_depth = 0

    def generate(self, grid: Grid, rng: random.Random) -> Grid:
        stack = [grid.random_cell(rng)]
        self.max_stack_depth = 1

        while stack:
            current = stack[-1]
            unvisited = [n for n in grid.neighbors(current) if n.link_count == 0]

            if not unvisited:
                stack.pop()
                continue

            neighbor = rng.choice(unvisited)
            grid.link(current, neighbor)
            stack.append(neighbor)
            if len(stack) > self.max_stack_depth:
                self.max_stack_depth = len(stack)

        return grid


class Division(NamedTuple):
    """One wall laid by recursive division.

    A horizontal divide separates row ``row`` from ``row + 1`` across
    ``length`` columns starting at ``column``; a vertical divide separates
    column ``column`` from ``column + 1`` across ``length`` rows starting at
    ``row``. ``passage`` is the offset along the divide left open.
    """
    orientation: str
    row: int
    column: int
    length: int
    passage: int


@dataclass
class _Region:
    row: int
    column: int
    height: int
    width: int


class RecursiveDivision(MazeAlgorithm):
    """
    Start fully open and repeatedly wall off sub-regions, leaving one passage per wall.

    Regions are processed from an explicit work stack. A region whose height or
    width is below minimum_size is left as it is. With room_size set, regions
    smaller than room_size in both dimensions are kept open as rooms with
    probability room_chance.
    """

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def __init__(self, minimum_size: int = 2, room_size: int = 0, room_chance: float = 0.25):
        if minimum_size < 2:
            raise ValueError("minimum_size must be at least 2")
        self.minimum_size = minimum_size
        self.room_size = room_size
        self.room_chance = room_chance
        self.divisions: List[Division] = []

    @property
    def perfect(self) -> bool:
        return self.minimum_size <= 2 and not self.room_size

    def generate(self, grid: Grid, rng: random.Random) -> Grid:
        self.divisions = []
        for cell in grid.each_cell():
            for neighbor in grid.neighbors(cell):
                grid.link(cell, neighbor, bidirectional=False)

        stack = [_Region(0, 0, grid.rows, grid.columns)]
        while stack:
            region = stack.pop()
            if self._should_stop(region, rng):
                continue
            if region.height > region.width:
                first, second = self._divide_horizontally(grid, region, rng)
            else:
                first, second = self._divide_vertically(grid, region, rng)
            # Push second first so the north/west half is processed first
            stack.append(second)
            stack.append(first)

        logger.debug("Recursive division laid %d walls", len(self.divisions))
        return grid

    def _should_stop(self, region: _Region, rng: random.Random) -> bool:
        if region.height < self.minimum_size or region.width < self.minimum_size:
            return True
        if self.room_size and region.height < self.room_size and region.width < self.room_size:
            return rng.random() < self.room_chance
        return False

    def _divide_horizontally(self, grid: Grid, region: _Region, rng: random.Random) -> Tuple[_Region, _Region]:
        divide_south_of = rng.randrange(region.height - 1)
        passage_at = rng.randrange(region.width)
        row = region.row + divide_south_of

        for offset in range(region.width):
            if offset == passage_at:
                continue
            cell = grid.cell_at(row, region.column + offset)
            grid.unlink(cell, grid.neighbor(cell, Direction.SOUTH))

        self.divisions.append(Division(self.HORIZONTAL, row, region.column, region.width, passage_at))
        north_height = divide_south_of + 1
        return (
            _Region(region.row, region.column, north_height, region.width),
            _Region(row + 1, region.column, region.height - north_height, region.width),
        )

    def _divide_vertically(self, grid: Grid, region: _Region, rng: random.Random) -> Tuple[_Region, _Region]:
        divide_east_of = rng.randrange(region.width - 1)
        passage_at = rng.randrange(region.height)
        column = region.column + divide_east_of

        for offset in range(region.height):
            if offset == passage_at:
                continue
            cell = grid.cell_at(region.row + offset, column)
            grid.unlink(cell, grid.neighbor(cell, Direction.EAST))

        self.divisions.append(Division(self.VERTICAL, region.row, column, region.height, passage_at))
        west_width = divide_east_of + 1
        return (
            _Region(region.row, region.column, region.height, west_width),
            _Region(region.row, column + 1, region.height, region.width - west_width),
        )

    def __repr__(self) -> str:
        return (f"RecursiveDivision(minimum_size={self.minimum_size}, "
                f"room_size={self.room_size}, room_chance={self.room_chance})")


class Algorithm(str, Enum):
    """Closed set of generation strategies."""

    BINARY_TREE = "binary_tree"
    ALDOUS_BRODER = "aldous_broder"
    RECURSIVE_BACKTRACKER = "recursive_backtracker"
    RECURSIVE_DIVISION = "recursive_division"

    @property
    def display_name(self) -> str:
        return self.value.replace('_', ' ').title()

    def create(self, **options) -> MazeAlgorithm:
        """Instantiate the strategy for this variant, passing options to its constructor."""
        return _STRATEGIES[self](**options)

    @classmethod
    def parse(cls, value: Union["Algorithm", str]) -> "Algorithm":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace('-', '_').replace(' ', '_')
        try:
            return cls(normalized)
        except ValueError:
            names = ', '.join(a.value for a in cls)
            raise ValueError(f"Unknown algorithm {value!r}; expected one of: {names}") from None


_STRATEGIES = {
    Algorithm.BINARY_TREE: BinaryTree,
    Algorithm.ALDOUS_BRODER: AldousBroder,
    Algorithm.RECURSIVE_BACKTRACKER: RecursiveBacktracker,
    Algorithm.RECURSIVE_DIVISION: RecursiveDivision,
}

for _variant, _strategy in _STRATEGIES.items():
    _strategy.algorithm = _variant


def classify_tiles(grid: Grid) -> Tuple[int, int]:
    """
    Shared post-processing: cells with no links become Wall, all others Floor.

    Args:
        grid: Grid whose links were just populated

    Returns:
        (floor_count, wall_count)
    """
    floors, walls = grid.classify_tiles()
    logger.debug("Classified %d floor and %d wall cells", floors, walls)
    return floors, walls
