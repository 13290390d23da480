from .errors import LevelGenerationError, InvalidDimension, DisconnectedGraph, GenerationFailed
from .grid import Grid, Cell, Direction
from .generation_algorithms import (
    Algorithm,
    MazeAlgorithm,
    BinaryTree,
    AldousBroder,
    RecursiveBacktracker,
    RecursiveDivision,
    classify_tiles,
)
from .distances import distances, farthest_cell, path_to, longest_path
from .path_guarantor import path_guarantor, ensure_path, validate_connectivity, flood_fill_find_regions
from .placement import PlacementResult, place_spawn_and_exit
from .seed_manager import SeedManager
from .level_data import LevelRecord, LayoutSnapshot, save_levels, load_levels
from .level_generator import GeneratedLevel, LevelGenerator, generate_procedural_level

__all__ = [
    'LevelGenerationError',
    'InvalidDimension',
    'DisconnectedGraph',
    'GenerationFailed',
    'Grid',
    'Cell',
    'Direction',
    'Algorithm',
    'MazeAlgorithm',
    'BinaryTree',
    'AldousBroder',
    'RecursiveBacktracker',
    'RecursiveDivision',
    'classify_tiles',
    'distances',
    'farthest_cell',
    'path_to',
    'longest_path',
    'path_guarantor',
    'ensure_path',
    'validate_connectivity',
    'flood_fill_find_regions',
    'PlacementResult',
    'place_spawn_and_exit',
    'SeedManager',
    'LevelRecord',
    'LayoutSnapshot',
    'save_levels',
    'load_levels',
    'GeneratedLevel',
    'LevelGenerator',
    'generate_procedural_level',
]
