"""
Distance solver - breadth-first distances over the link graph and the
queries built on them (farthest cell, paths, longest path).
"""

import logging
from collections import deque
from typing import Dict, List, Mapping, Tuple

from .grid import Cell, Grid

logger = logging.getLogger(__name__)


def distances(grid: Grid, from_cell: Cell) -> Dict[Cell, int]:
    """
    Hop distance from from_cell to every cell reachable through links.

    Args:
        grid: Grid to traverse
        from_cell: Root of the traversal (distance 0)

    Returns:
        Mapping of cell -> distance in BFS order. Unreachable cells are absent.
    """
    result: Dict[Cell, int] = {from_cell: 0}
    queue = deque([from_cell])

    while queue:
        cell = queue.popleft()
        next_distance = result[cell] + 1
        for linked in grid.links(cell):
            if linked not in result:
                result[linked] = next_distance
                queue.append(linked)

    return result


def farthest_cell(cell_distances: Mapping[Cell, int]) -> Cell:
    """
    Cell with the greatest distance.

    Ties go to the lowest row, then the lowest column, so the answer never
    depends on traversal order.
    """
    if not cell_distances:
        raise ValueError("farthest_cell() needs at least one distance")
    return min(cell_distances, key=lambda c: (-cell_distances[c], c.row, c.column))


def path_to(grid: Grid, cell_distances: Mapping[Cell, int], goal: Cell) -> List[Cell]:
    """
    Shortest path from the distance root to goal, root first.

    Walks back from goal through linked cells with strictly smaller distance.

    Returns:
        List of cells, or an empty list when goal is unreachable
    """
    if goal not in cell_distances:
        return []

    path = [goal]
    current = goal
    while cell_distances[current] > 0:
        for neighbor in grid.links(current):
            if neighbor in cell_distances and cell_distances[neighbor] < cell_distances[current]:
                current = neighbor
                break
        else:
            # Only reachable with a distance map that doesn't belong to this grid
            return []
        path.append(current)

    path.reverse()
    return path


def longest_path(grid: Grid, start: Cell) -> Tuple[Cell, Cell, int]:
    """
    Two-pass BFS: the farthest cell from start, then the farthest cell from that.

    Exact on trees. Returns (first_end, second_end, length).
    """
    first_end = farthest_cell(distances(grid, start))
    from_first = distances(grid, first_end)
    second_end = farthest_cell(from_first)
    length = from_first[second_end]
    logger.debug("Longest path %s -> %s, length %d", first_end.position, second_end.position, length)
    return first_end, second_end, length


def dead_ends(grid: Grid) -> List[Cell]:
    """Floor cells with exactly one link."""
    return grid.dead_ends()
