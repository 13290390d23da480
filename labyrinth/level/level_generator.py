"""
Level Generator - Main orchestrator for maze level generation
"""

import logging
import random
import time
from dataclasses import replace
from typing import Any, Dict, FrozenSet, List, NamedTuple, Optional, Tuple, Union

import config
from labyrinth.tiles.tile_types import TileType
from .distances import distances
from .errors import GenerationFailed, LevelGenerationError
from .generation_algorithms import Algorithm, MazeAlgorithm, classify_tiles
from .grid import Direction, Grid
from .level_data import LayoutSnapshot, LevelRecord
from .level_progression import LevelProgress
from .path_guarantor import ensure_path, validate_connectivity
from .placement import PlacementResult, place_spawn_and_exit
from .seed_manager import SeedManager

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class CellView(NamedTuple):
    """Read-only view of a cell for the game runtime."""
    tile: TileType
    linked_directions: FrozenSet[Direction]


class LevelEntity(NamedTuple):
    """Content placed on the level ('spawn' or 'exit')."""
    kind: str
    position: Position


class GeneratedLevel:
    """
    One generated level: the carved grid plus its placement.

    The game runtime reads the level through dimensions(), cell_at(),
    random_cell(), distances() and is_linked(), all keyed by (row, column).
    Once place_content() has run, the core never touches the grid again.
    """

    def __init__(self, grid: Grid, algorithm: Algorithm, seed: int, level_index: int = 0,
                 spawn: Position = config.DEFAULT_SPAWN):
        self.grid = grid
        self.algorithm = algorithm
        self.seed = seed
        self.level_index = level_index
        self.spawn_preference = spawn

        self.placement: Optional[PlacementResult] = None
        self.entities: List[LevelEntity] = []
        self.generated = False
        self.guarantor_used = False
        self.stats: Dict[str, Any] = {}

    def place_content(self, rng: random.Random, guarantee_path: bool = True) -> PlacementResult:
        """
        Place spawn and exit, once.

        Repeated calls return the stored placement without touching the grid
        or the entity list.

        Args:
            rng: Seeded random source for placement
            guarantee_path: Carve a route if the exit is somehow unreachable
        """
        if self.generated:
            logger.debug("Level %d already populated; keeping existing placement", self.level_index)
            return self.placement

        placement = place_spawn_and_exit(
            self.grid, rng,
            spawn=self.spawn_preference,
            seed=self.seed,
            algorithm=self.algorithm.value,
        )

        if guarantee_path and placement.spawn != placement.exit:
            spawn_cell = self.grid.cell_at(*placement.spawn)
            exit_cell = self.grid.cell_at(*placement.exit)
            if ensure_path(self.grid, spawn_cell, exit_cell):
                self.guarantor_used = True
                placement = replace(placement, distance=distances(self.grid, spawn_cell)[exit_cell])

        self.placement = placement
        self.entities = [
            LevelEntity('spawn', placement.spawn),
            LevelEntity('exit', placement.exit),
        ]
        self.generated = True
        return placement

    # Read-only query surface

    @property
    def spawn(self) -> Optional[Position]:
        return self.placement.spawn if self.placement else None

    @property
    def exit(self) -> Optional[Position]:
        return self.placement.exit if self.placement else None

    def dimensions(self) -> Tuple[int, int]:
        return self.grid.dimensions()

    def cell_at(self, row: int, column: int) -> Optional[CellView]:
        cell = self.grid.cell_at(row, column)
        if cell is None:
            return None
        return CellView(cell.tile, cell.linked_directions)

    def random_cell(self, rng: random.Random) -> Position:
        return self.grid.random_cell(rng).position

    def distances(self, from_position: Position) -> Dict[Position, int]:
        cell = self.grid.cell_at(*from_position)
        if cell is None:
            return {}
        return {c.position: d for c, d in distances(self.grid, cell).items()}

    def is_linked(self, a: Position, b: Position) -> bool:
        cell_a = self.grid.cell_at(*a)
        cell_b = self.grid.cell_at(*b)
        if cell_a is None or cell_b is None:
            return False
        return self.grid.is_linked(cell_a, cell_b)

    def wall_count(self) -> int:
        return len(self.grid.wall_cells())

    # Persistence

    def to_record(self) -> LevelRecord:
        rows, columns = self.grid.dimensions()
        return LevelRecord(rows=rows, columns=columns, seed=self.seed, algorithm=self.algorithm.value)

    def layout_snapshot(self) -> LayoutSnapshot:
        return LayoutSnapshot(record=self.to_record(), layout=self.grid.layout(), placement=self.placement)

    def __repr__(self) -> str:
        rows, columns = self.grid.dimensions()
        return (f"GeneratedLevel(index={self.level_index}, {rows}x{columns}, "
                f"algorithm={self.algorithm.value}, seed={self.seed})")


class LevelGenerator:
    """Main level generation orchestrator"""

    def __init__(self, rows: int = config.DEFAULT_ROWS, columns: int = config.DEFAULT_COLUMNS,
                 algorithm: Union[Algorithm, str] = config.DEFAULT_ALGORITHM,
                 world_seed: Optional[int] = None, guarantee_path: bool = True,
                 algorithm_options: Optional[Dict[Algorithm, Dict[str, Any]]] = None):
        """
        Args:
            rows: Default grid rows
            columns: Default grid columns
            algorithm: Default algorithm
            world_seed: Master seed; random if None
            guarantee_path: Run the path guarantor after placement
            algorithm_options: Extra constructor options per algorithm
        """
        self.rows = rows
        self.columns = columns
        self.algorithm = Algorithm.parse(algorithm)
        self.guarantee_path = guarantee_path
        self.algorithm_options = {Algorithm.parse(k): dict(v) for k, v in (algorithm_options or {}).items()}
        self.seed_manager = SeedManager(world_seed)
        self.progress = LevelProgress()

        # Performance tracking
        self.generation_time_ms = 0.0
        self.fallbacks = 0
        self.last_stats: Dict[str, Any] = {}

    def generate_level(self, level_index: int = 0, rows: Optional[int] = None, columns: Optional[int] = None,
                       algorithm: Union[Algorithm, str, None] = None, seed: Optional[int] = None) -> GeneratedLevel:
        """
        Generate a complete level

        Args:
            level_index: Index of level to generate
            rows: Grid rows (defaults to the generator's)
            columns: Grid columns (defaults to the generator's)
            algorithm: Algorithm to carve with (defaults to the generator's)
            seed: Explicit level seed; bypasses the world seed

        Returns:
            GeneratedLevel with placement done

        Raises:
            InvalidDimension: rows or columns not positive
            DisconnectedGraph: the carved grid broke the spanning-tree invariant
            GenerationFailed: a bounded step ran out of iterations
        """
        start_time = time.time()
        rows = self.rows if rows is None else rows
        columns = self.columns if columns is None else columns
        requested = self.algorithm if algorithm is None else Algorithm.parse(algorithm)

        if seed is not None:
            self.seed_manager.use_level_seed(seed)
            level_seed = seed
        else:
            level_seed = self.seed_manager.generate_level_seed(level_index)
        self.seed_manager.generate_sub_seeds(level_seed)

        logger.info("Generating level %d: %dx%d, algorithm=%s, seed=%d",
                    level_index, rows, columns, requested.value, level_seed)

        try:
            grid, strategy = self._carve(rows, columns, requested, level_seed)
            floors, walls = classify_tiles(grid)
            validate_connectivity(grid, require_tree=strategy.perfect)

            level = GeneratedLevel(grid, strategy.algorithm, level_seed, level_index)
            level.place_content(self.seed_manager.get_random('placement'), guarantee_path=self.guarantee_path)
        except LevelGenerationError as exc:
            logger.error("Level %d generation failed (seed=%d, algorithm=%s): %s",
                         level_index, level_seed, requested.value, exc)
            raise

        # Track performance
        self.generation_time_ms = (time.time() - start_time) * 1000
        dead_end_count = len(grid.dead_ends())
        level.stats = {
            'generation_time_ms': self.generation_time_ms,
            'floor_cells': floors,
            'wall_cells': walls,
            'passages': grid.edge_count(),
            'dead_ends': dead_end_count,
            'requested_algorithm': requested.value,
            'algorithm': strategy.algorithm.value,
            'fell_back': strategy.algorithm != requested,
            'guarantor_used': level.guarantor_used,
        }
        self.last_stats = level.stats
        logger.debug("Level %d carved with %d dead ends in %.1f ms",
                     level_index, dead_end_count, self.generation_time_ms)
        return level

    def _create_strategy(self, algorithm: Algorithm, cell_count: int) -> MazeAlgorithm:
        options = dict(self.algorithm_options.get(algorithm, {}))
        if algorithm == Algorithm.ALDOUS_BRODER:
            options.setdefault('max_steps', config.ALDOUS_BRODER_STEPS_PER_CELL * cell_count)
        elif algorithm == Algorithm.RECURSIVE_DIVISION:
            options.setdefault('minimum_size', config.DIVISION_MINIMUM_SIZE)
        return algorithm.create(**options)

    def _carve(self, rows: int, columns: int, algorithm: Algorithm, level_seed: int) -> Tuple[Grid, MazeAlgorithm]:
        grid = Grid(rows, columns)
        strategy = self._create_strategy(algorithm, grid.size)
        logger.debug("Carving with %r", strategy)
        try:
            strategy.generate(grid, self.seed_manager.get_random('structure'))
            return grid, strategy
        except GenerationFailed as exc:
            if algorithm != Algorithm.ALDOUS_BRODER:
                raise
            fallback = Algorithm.parse(config.FALLBACK_ALGORITHM)
            logger.warning("%s; regenerating with %s", exc, fallback.display_name)
            self.fallbacks += 1

        # Fresh grid and a fresh structure stream from the same level seed
        self.seed_manager.use_level_seed(level_seed)
        grid = Grid(rows, columns)
        strategy = self._create_strategy(fallback, grid.size)
        strategy.generate(grid, self.seed_manager.get_random('structure'))
        return grid, strategy

    def regenerate(self, record: LevelRecord, level_index: int = 0) -> GeneratedLevel:
        """Rebuild a saved level from its (rows, columns, seed, algorithm) record"""
        return self.generate_level(level_index, record.rows, record.columns, record.algorithm, seed=record.seed)

    def random_level(self, level_index: int = 0) -> GeneratedLevel:
        """Level with size and algorithm drawn from the world seed"""
        level_seed = self.seed_manager.generate_level_seed(level_index)
        rng = self.seed_manager.get_random('dimensions')
        rows = rng.randint(config.RANDOM_LEVEL_MIN_SIZE, config.RANDOM_LEVEL_MAX_SIZE)
        columns = rng.randint(config.RANDOM_LEVEL_MIN_SIZE, config.RANDOM_LEVEL_MAX_SIZE)
        algorithm = rng.choice(list(Algorithm))
        return self.generate_level(level_index, rows, columns, algorithm, seed=level_seed)

    def generate_level_from_config(self, level_index: int) -> GeneratedLevel:
        """Level sized and carved according to the level progression table"""
        level_config = self.progress.get_level_config(level_index)
        logger.info("Level %d theme: %s", level_index, level_config['level_name'])
        return self.generate_level(
            level_index,
            level_config['rows'],
            level_config['columns'],
            level_config['algorithm'],
        )

    def get_generation_stats(self) -> Dict[str, Any]:
        """Get statistics about last generation"""
        return {
            'generation_time_ms': self.generation_time_ms,
            'fallbacks': self.fallbacks,
            'world_seed': self.seed_manager.get_world_seed(),
            'seed_info': self.seed_manager.get_seed_info(),
            'last_level': dict(self.last_stats),
        }

    def set_world_seed(self, seed: int):
        """Set the world seed for deterministic generation"""
        self.seed_manager.set_world_seed(seed)

    def get_world_seed(self) -> int:
        """Get the current world seed"""
        return self.seed_manager.get_world_seed()


def generate_procedural_level(level_index: int = 0, rows: int = config.DEFAULT_ROWS,
                              columns: int = config.DEFAULT_COLUMNS,
                              algorithm: Union[Algorithm, str] = config.DEFAULT_ALGORITHM,
                              seed: Optional[int] = None) -> GeneratedLevel:
    """
    Convenience function for generating levels

    Args:
        level_index: Index of level to generate
        rows: Grid rows
        columns: Grid columns
        algorithm: Generation algorithm
        seed: Optional world seed

    Returns:
        GeneratedLevel instance
    """
    generator = LevelGenerator(rows=rows, columns=columns, algorithm=algorithm, world_seed=seed)
    return generator.generate_level(level_index)
