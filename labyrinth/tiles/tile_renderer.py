import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import pygame

from config import (
    TILE,
    WALL_THICKNESS,
    BG,
    FLOOR_COLOR,
    WALL_COLOR,
    WALL_LINE_COLOR,
    SPAWN_COLOR,
    EXIT_COLOR,
)
from .tile_types import TileType

logger = logging.getLogger(__name__)


def render_ascii(grid, placement=None) -> str:
    """
    Draw a grid as ASCII art.

    Corners are '+', closed passages '---' and '|', Wall cells '###'.
    The spawn is marked '@' and the exit '>'.
    """
    spawn = placement.spawn if placement else None
    exit_pos = placement.exit if placement else None

    lines = ["+" + "---+" * grid.columns]
    for row in range(grid.rows):
        top = ["|"]
        bottom = ["+"]
        for column in range(grid.columns):
            cell = grid.cell_at(row, column)
            if cell.position == spawn:
                body = " @ "
            elif cell.position == exit_pos:
                body = " > "
            elif cell.tile == TileType.WALL:
                body = "###"
            else:
                body = "   "

            east = grid.cell_at(row, column + 1)
            south = grid.cell_at(row + 1, column)
            top.append(body + (" " if east is not None and grid.is_linked(cell, east) else "|"))
            bottom.append(("   " if south is not None and grid.is_linked(cell, south) else "---") + "+")
        lines.append("".join(top))
        lines.append("".join(bottom))
    return "\n".join(lines)


class TileRenderer:
    """Handles pygame rendering of generated levels."""

    def __init__(self, tile_size: Optional[int] = None):
        # Use provided tile_size or fall back to configured TILE constant
        self.tile_size = tile_size if tile_size is not None else TILE
        self.level_surface_cache: Dict[str, pygame.Surface] = {}

    def surface_size(self, level) -> Tuple[int, int]:
        rows, columns = level.dimensions()
        return (columns * self.tile_size + WALL_THICKNESS, rows * self.tile_size + WALL_THICKNESS)

    def draw_level(self, surface: pygame.Surface, level, offset: Tuple[int, int] = (0, 0)) -> None:
        """Draw cells, closed passages and spawn/exit markers at offset."""
        grid = level.grid
        size = self.tile_size
        ox, oy = offset

        for cell in grid.each_cell():
            x = ox + cell.column * size
            y = oy + cell.row * size
            color = WALL_COLOR if cell.tile == TileType.WALL else FLOOR_COLOR
            pygame.draw.rect(surface, color, pygame.Rect(x, y, size, size))

        for cell in grid.each_cell():
            x1 = ox + cell.column * size
            y1 = oy + cell.row * size
            x2 = x1 + size
            y2 = y1 + size

            if cell.row == 0:
                pygame.draw.line(surface, WALL_LINE_COLOR, (x1, y1), (x2, y1), WALL_THICKNESS)
            if cell.column == 0:
                pygame.draw.line(surface, WALL_LINE_COLOR, (x1, y1), (x1, y2), WALL_THICKNESS)

            east = grid.cell_at(cell.row, cell.column + 1)
            if east is None or not grid.is_linked(cell, east):
                pygame.draw.line(surface, WALL_LINE_COLOR, (x2, y1), (x2, y2), WALL_THICKNESS)
            south = grid.cell_at(cell.row + 1, cell.column)
            if south is None or not grid.is_linked(cell, south):
                pygame.draw.line(surface, WALL_LINE_COLOR, (x1, y2), (x2, y2), WALL_THICKNESS)

        placement = level.placement
        if placement:
            self._draw_marker(surface, placement.exit, EXIT_COLOR, offset)
            self._draw_marker(surface, placement.spawn, SPAWN_COLOR, offset)

    def _draw_marker(self, surface: pygame.Surface, position: Tuple[int, int], color, offset: Tuple[int, int]):
        row, column = position
        center = (
            offset[0] + column * self.tile_size + self.tile_size // 2,
            offset[1] + row * self.tile_size + self.tile_size // 2,
        )
        pygame.draw.circle(surface, color, center, max(2, self.tile_size // 3))

    def build_surface(self, level) -> pygame.Surface:
        """Pre-render a whole level onto its own surface (cached per level)."""
        rows, columns = level.dimensions()
        cache_key = f"{level.seed}_{level.algorithm.value}_{rows}x{columns}_{self.tile_size}"
        cached = self.level_surface_cache.get(cache_key)
        if cached is not None:
            return cached

        surface = pygame.Surface(self.surface_size(level))
        surface.fill(BG)
        self.draw_level(surface, level)
        self.level_surface_cache[cache_key] = surface
        return surface

    def save_png(self, level, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        pygame.image.save(self.build_surface(level), str(path))
        logger.info("Saved level preview to %s", path)
        return path

    def clear_cache(self):
        self.level_surface_cache.clear()
