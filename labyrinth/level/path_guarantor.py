"""
Connectivity checks and repair for generated grids.

validate_connectivity() enforces the spanning-tree invariant after generation.
path_guarantor() is the safety net that carves a direct route between two
cells when some later mutation may have cut them apart; it is not part of
normal generation.
"""

import logging
from collections import deque
from typing import List, Set

from .distances import distances
from .errors import DisconnectedGraph, GenerationFailed
from .grid import Cell, Grid

logger = logging.getLogger(__name__)


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a.row - b.row) + abs(a.column - b.column)


def flood_fill_find_regions(grid: Grid) -> List[Set[Cell]]:
    """
    Find all disconnected Floor regions using flood-fill over links.

    Regions are returned in row-major order of their first cell.

    Args:
        grid: Grid whose tiles have been classified

    Returns:
        List of cell sets, one per connected region
    """
    regions: List[Set[Cell]] = []
    seen: Set[Cell] = set()

    for start in grid.each_cell():
        if not start.is_floor or start in seen:
            continue
        region = {start}
        seen.add(start)
        queue = deque([start])
        while queue:
            cell = queue.popleft()
            for linked in grid.links(cell):
                if linked.is_floor and linked not in seen:
                    seen.add(linked)
                    region.add(linked)
                    queue.append(linked)
        regions.append(region)

    return regions


def validate_connectivity(grid: Grid, require_tree: bool = True) -> int:
    """
    Check that Floor cells form one component and, optionally, a tree.

    Args:
        grid: Grid whose tiles have been classified
        require_tree: Also require exactly floor_count - 1 passages

    Returns:
        Number of Floor cells

    Raises:
        DisconnectedGraph: If the invariant does not hold
    """
    regions = flood_fill_find_regions(grid)
    floor_count = sum(len(region) for region in regions)
    edge_count = grid.edge_count(floor_only=True)

    if len(regions) > 1:
        sizes = sorted((len(r) for r in regions), reverse=True)
        raise DisconnectedGraph(
            f"Floor cells split into {len(regions)} regions (sizes {sizes})",
            component_count=len(regions),
            floor_count=floor_count,
            edge_count=edge_count,
        )

    if require_tree and floor_count and edge_count != floor_count - 1:
        raise DisconnectedGraph(
            f"Floor graph has {edge_count} passages for {floor_count} cells; expected {floor_count - 1}",
            component_count=len(regions),
            floor_count=floor_count,
            edge_count=edge_count,
        )

    return floor_count


def path_guarantor(grid: Grid, start_cell: Cell, goal_cell: Cell) -> List[Cell]:
    """
    Carve a greedy route from start_cell to goal_cell.

    At each step the geometric neighbour closest to the goal (Manhattan
    distance, ties in north/south/east/west order) is linked if needed and
    becomes the current cell.

    Returns:
        Cells along the route, start first and goal last

    Raises:
        GenerationFailed: If the route takes more than rows + columns steps
    """
    bound = grid.rows + grid.columns
    current = start_cell
    path = [current]
    steps = 0

    while current is not goal_cell:
        if steps >= bound:
            raise GenerationFailed(
                f"Path guarantor exceeded {bound} steps between {start_cell.position} and {goal_cell.position}"
            )
        step = min(grid.neighbors(current), key=lambda n: manhattan(n, goal_cell))
        if not grid.is_linked(current, step):
            grid.link(current, step)
        current = step
        path.append(current)
        steps += 1

    return path


def ensure_path(grid: Grid, start_cell: Cell, goal_cell: Cell) -> bool:
    """
    Make goal_cell reachable from start_cell, carving only if it isn't already.

    Tiles are re-classified after a carve.

    Returns:
        True if links were created
    """
    if goal_cell in distances(grid, start_cell):
        return False

    logger.warning("No route from %s to %s; carving one", start_cell.position, goal_cell.position)
    path = path_guarantor(grid, start_cell, goal_cell)
    grid.classify_tiles()
    logger.info("Path guarantor carved %d steps", len(path) - 1)
    return True
