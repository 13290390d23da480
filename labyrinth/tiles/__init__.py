from .tile_types import TileType
from .tile_renderer import TileRenderer, render_ascii

__all__ = [
    'TileType',
    'TileRenderer',
    'render_ascii',
]
