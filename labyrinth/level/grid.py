"""
Grid model - rectangular cell space with a mutable set of passages between cells.

Cells live in one flat list owned by the Grid and indexed by
``row * columns + column``. Neighbour lookups are index computations on the
grid, so a Cell never holds references to other cells; its links are stored as
the set of directions in which a passage is open.
"""

import random
from enum import Enum
from typing import FrozenSet, Iterator, List, Optional, Set, Tuple

from labyrinth.tiles.tile_types import TileType
from .errors import InvalidDimension


class Direction(Enum):
    """Compass direction with its (row, column) delta. Row 0 is the north edge."""

    NORTH = (-1, 0)
    SOUTH = (1, 0)
    EAST = (0, 1)
    WEST = (0, -1)

    @property
    def d_row(self) -> int:
        return self.value[0]

    @property
    def d_column(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

# Neighbour order used everywhere; keeps random choices reproducible
DIRECTIONS: Tuple[Direction, ...] = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)


class Cell:
    """A single maze cell: position, derived tile and open passages."""

    __slots__ = ("row", "column", "tile", "_links")

    def __init__(self, row: int, column: int):
        self.row = row
        self.column = column
        self.tile = TileType.WALL
        self._links: Set[Direction] = set()

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.column)

    @property
    def linked_directions(self) -> FrozenSet[Direction]:
        return frozenset(self._links)

    @property
    def link_count(self) -> int:
        return len(self._links)

    @property
    def is_floor(self) -> bool:
        return self.tile == TileType.FLOOR

    @property
    def is_wall(self) -> bool:
        return self.tile == TileType.WALL

    @property
    def is_dead_end(self) -> bool:
        return len(self._links) == 1

    def has_link(self, direction: Direction) -> bool:
        return direction in self._links

    def __repr__(self) -> str:
        return f"Cell({self.row}, {self.column}, {self.tile.label})"


class Grid:
    """
    Fixed ``rows x columns`` array of cells.

    Dimensions are immutable after construction. Links are mutated only through
    link()/unlink(), which keep both sides of a passage in step by default.
    """

    def __init__(self, rows: int, columns: int):
        if not _positive_int(rows) or not _positive_int(columns):
            raise InvalidDimension(rows, columns)
        self._rows = rows
        self._columns = columns
        self._cells: List[Cell] = [Cell(i // columns, i % columns) for i in range(rows * columns)]

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def size(self) -> int:
        return self._rows * self._columns

    def dimensions(self) -> Tuple[int, int]:
        return (self._rows, self._columns)

    def is_in_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self._rows and 0 <= column < self._columns

    def cell_at(self, row: int, column: int) -> Optional[Cell]:
        """Return the cell at (row, column), or None when out of bounds."""
        if not isinstance(row, int) or not isinstance(column, int):
            return None
        if not self.is_in_bounds(row, column):
            return None
        return self._cells[row * self._columns + column]

    def each_cell(self) -> Iterator[Cell]:
        """Yield every cell in row-major order. Each call starts a fresh pass."""
        for cell in self._cells:
            yield cell

    def __iter__(self) -> Iterator[Cell]:
        return self.each_cell()

    def __len__(self) -> int:
        return self.size

    def random_cell(self, rng: random.Random) -> Cell:
        return rng.choice(self._cells)

    def neighbor(self, cell: Cell, direction: Direction) -> Optional[Cell]:
        return self.cell_at(cell.row + direction.d_row, cell.column + direction.d_column)

    def neighbors(self, cell: Cell) -> List[Cell]:
        """Geometric neighbours in north, south, east, west order."""
        result = []
        for direction in DIRECTIONS:
            other = self.neighbor(cell, direction)
            if other is not None:
                result.append(other)
        return result

    def direction_between(self, a: Cell, b: Cell) -> Optional[Direction]:
        """Direction leading from a to b, or None if they are not adjacent."""
        for direction in DIRECTIONS:
            if a.row + direction.d_row == b.row and a.column + direction.d_column == b.column:
                return direction
        return None

    def _require_direction(self, a: Cell, b: Cell) -> Direction:
        direction = self.direction_between(a, b)
        if direction is None:
            raise ValueError(f"{a!r} and {b!r} are not adjacent")
        return direction

    def link(self, a: Cell, b: Cell, bidirectional: bool = True) -> None:
        """Open a passage from a to b (and back, unless bidirectional is False)."""
        direction = self._require_direction(a, b)
        a._links.add(direction)
        if bidirectional:
            b._links.add(direction.opposite)

    def unlink(self, a: Cell, b: Cell, bidirectional: bool = True) -> None:
        direction = self._require_direction(a, b)
        a._links.discard(direction)
        if bidirectional:
            b._links.discard(direction.opposite)

    def is_linked(self, a: Cell, b: Cell) -> bool:
        direction = self.direction_between(a, b)
        return direction is not None and direction in a._links

    def links(self, cell: Cell) -> List[Cell]:
        """Cells reachable from cell through one open passage."""
        result = []
        for direction in DIRECTIONS:
            if direction in cell._links:
                other = self.neighbor(cell, direction)
                if other is not None:
                    result.append(other)
        return result

    def classify_tiles(self) -> Tuple[int, int]:
        """
        Derive every cell's tile from its link set.

        Returns:
            (floor_count, wall_count)
        """
        floors = 0
        for cell in self._cells:
            if cell._links:
                cell.tile = TileType.FLOOR
                floors += 1
            else:
                cell.tile = TileType.WALL
        return floors, self.size - floors

    def floor_cells(self) -> List[Cell]:
        return [cell for cell in self._cells if cell.is_floor]

    def wall_cells(self) -> List[Cell]:
        return [cell for cell in self._cells if cell.is_wall]

    def dead_ends(self) -> List[Cell]:
        return [cell for cell in self._cells if cell.is_floor and cell.is_dead_end]

    def edge_count(self, floor_only: bool = False) -> int:
        """Number of passages, counting each linked pair once."""
        count = 0
        for cell in self._cells:
            if floor_only and not cell.is_floor:
                continue
            # South and east cover every pair exactly once
            for direction in (Direction.SOUTH, Direction.EAST):
                if direction not in cell._links:
                    continue
                other = self.neighbor(cell, direction)
                if other is None or (floor_only and not other.is_floor):
                    continue
                count += 1
        return count

    def tile_rows(self) -> List[List[TileType]]:
        return [
            [self._cells[r * self._columns + c].tile for c in range(self._columns)]
            for r in range(self._rows)
        ]

    def layout(self) -> List[str]:
        """Wall/Floor layout as strings, '#' for Wall and '.' for Floor."""
        return [''.join(tile.symbol for tile in row) for row in self.tile_rows()]

    def __repr__(self) -> str:
        return f"Grid({self._rows}, {self._columns})"


def _positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
