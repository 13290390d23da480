"""
End-to-end tests for LevelGenerator and GeneratedLevel.
"""

import random

import pytest

import config
from labyrinth.level import (
    Algorithm,
    GeneratedLevel,
    InvalidDimension,
    LevelGenerationError,
    LevelGenerator,
    LevelRecord,
    generate_procedural_level,
)
from labyrinth.level.level_progression import LevelProgress
from labyrinth.tiles.tile_types import TileType


@pytest.fixture
def generator():
    return LevelGenerator(rows=10, columns=12, world_seed=4242)


class TestGenerateLevel:

    def test_returns_populated_level(self, generator):
        level = generator.generate_level(0)
        assert isinstance(level, GeneratedLevel)
        assert level.generated
        assert level.dimensions() == (10, 12)
        assert level.spawn == (0, 0)
        assert level.exit is not None

    @pytest.mark.parametrize("algorithm", list(Algorithm))
    def test_every_algorithm_yields_spanning_tree(self, generator, algorithm):
        level = generator.generate_level(1, algorithm=algorithm)
        stats = level.stats
        assert stats['floor_cells'] == 120
        assert stats['wall_cells'] == 0
        assert stats['passages'] == stats['floor_cells'] - 1
        assert not stats['guarantor_used']

    def test_same_world_seed_same_level(self):
        first = LevelGenerator(rows=8, columns=8, world_seed=7).generate_level(3)
        second = LevelGenerator(rows=8, columns=8, world_seed=7).generate_level(3)
        assert first.seed == second.seed
        assert first.grid.layout() == second.grid.layout()
        assert [c.linked_directions for c in first.grid] == [c.linked_directions for c in second.grid]
        assert first.placement == second.placement

    def test_levels_differ_by_index(self, generator):
        first = generator.generate_level(0)
        second = generator.generate_level(1)
        assert first.seed != second.seed
        assert [c.linked_directions for c in first.grid] != [c.linked_directions for c in second.grid]

    def test_explicit_seed_bypasses_world_seed(self):
        a = LevelGenerator(rows=6, columns=6, world_seed=1).generate_level(seed=555)
        b = LevelGenerator(rows=6, columns=6, world_seed=2).generate_level(seed=555)
        assert a.seed == b.seed == 555
        assert [c.linked_directions for c in a.grid] == [c.linked_directions for c in b.grid]

    def test_per_call_overrides(self, generator):
        level = generator.generate_level(0, rows=4, columns=5, algorithm='binary_tree')
        assert level.dimensions() == (4, 5)
        assert level.algorithm is Algorithm.BINARY_TREE

    @pytest.mark.parametrize("rows,columns", [(0, 4), (4, 0), (-3, 3)])
    def test_invalid_dimensions(self, generator, rows, columns):
        with pytest.raises(InvalidDimension):
            generator.generate_level(0, rows=rows, columns=columns)

    def test_invalid_dimension_is_generation_error(self, generator):
        with pytest.raises(LevelGenerationError):
            generator.generate_level(0, rows=0, columns=0)

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError):
            LevelGenerator(algorithm='eller')

    def test_single_cell_level(self, generator):
        level = generator.generate_level(0, rows=1, columns=1)
        assert level.spawn == level.exit == (0, 0)
        assert level.wall_count() == 1
        assert level.placement.distance == 0

    def test_exit_is_farthest_from_spawn(self, generator):
        level = generator.generate_level(5)
        spawn_distances = level.distances(level.spawn)
        assert spawn_distances[level.exit] == max(spawn_distances.values())

    def test_non_perfect_division_is_accepted(self):
        generator = LevelGenerator(
            rows=10, columns=10, world_seed=3, algorithm='recursive_division',
            algorithm_options={'recursive_division': {'minimum_size': 3}},
        )
        level = generator.generate_level(0)
        assert level.stats['floor_cells'] == 100
        assert level.stats['passages'] >= 99


class TestAldousBroderFallback:

    def test_falls_back_when_walk_is_capped(self):
        generator = LevelGenerator(
            rows=10, columns=10, world_seed=9, algorithm=Algorithm.ALDOUS_BRODER,
            algorithm_options={Algorithm.ALDOUS_BRODER: {'max_steps': 5}},
        )
        level = generator.generate_level(0)

        assert level.algorithm.value == config.FALLBACK_ALGORITHM
        assert level.stats['fell_back']
        assert level.stats['requested_algorithm'] == 'aldous_broder'
        assert level.stats['passages'] == 99
        assert generator.get_generation_stats()['fallbacks'] == 1

    def test_fallback_level_regenerates_from_record(self):
        generator = LevelGenerator(
            rows=8, columns=8, world_seed=9, algorithm=Algorithm.ALDOUS_BRODER,
            algorithm_options={Algorithm.ALDOUS_BRODER: {'max_steps': 5}},
        )
        level = generator.generate_level(2)
        record = level.to_record()
        assert record.algorithm == config.FALLBACK_ALGORITHM

        again = LevelGenerator().regenerate(record)
        assert again.grid.layout() == level.grid.layout()
        assert [c.linked_directions for c in again.grid] == [c.linked_directions for c in level.grid]
        assert again.placement == level.placement

    def test_default_cap_lets_small_grids_finish(self):
        level = LevelGenerator(rows=6, columns=6, world_seed=1, algorithm='aldous_broder').generate_level(0)
        assert level.algorithm is Algorithm.ALDOUS_BRODER
        assert not level.stats['fell_back']


class TestQuerySurface:

    @pytest.fixture
    def level(self, generator):
        return generator.generate_level(0)

    def test_cell_at(self, level):
        view = level.cell_at(0, 0)
        assert view.tile == TileType.FLOOR
        assert view.linked_directions

    @pytest.mark.parametrize("position", [(-1, 0), (0, -1), (10, 0), (0, 12)])
    def test_cell_at_out_of_bounds(self, level, position):
        assert level.cell_at(*position) is None

    def test_is_linked_matches_cell_view(self, level):
        view = level.cell_at(5, 5)
        for direction in view.linked_directions:
            neighbor = (5 + direction.d_row, 5 + direction.d_column)
            assert level.is_linked((5, 5), neighbor)
            assert level.is_linked(neighbor, (5, 5))

    def test_is_linked_out_of_bounds(self, level):
        assert not level.is_linked((0, 0), (-1, 0))

    def test_distances_keyed_by_position(self, level):
        result = level.distances((0, 0))
        assert result[(0, 0)] == 0
        assert len(result) == 120

    def test_distances_out_of_bounds(self, level):
        assert level.distances((50, 50)) == {}

    def test_random_cell_returns_position(self, level):
        row, column = level.random_cell(random.Random(3))
        assert 0 <= row < 10 and 0 <= column < 12

    def test_record_and_snapshot(self, level):
        record = level.to_record()
        assert record == LevelRecord(10, 12, level.seed, level.algorithm.value)
        snapshot = level.layout_snapshot()
        assert snapshot.layout == level.grid.layout()
        assert snapshot.placement == level.placement


class TestRandomAndProgression:

    def test_random_level_is_deterministic(self):
        a = LevelGenerator(world_seed=77).random_level(4)
        b = LevelGenerator(world_seed=77).random_level(4)
        assert a.dimensions() == b.dimensions()
        assert a.algorithm == b.algorithm
        assert a.grid.layout() == b.grid.layout()
        assert a.placement == b.placement

    def test_random_level_size_in_range(self):
        generator = LevelGenerator(world_seed=5)
        for index in range(4):
            rows, columns = generator.random_level(index).dimensions()
            assert config.RANDOM_LEVEL_MIN_SIZE <= rows <= config.RANDOM_LEVEL_MAX_SIZE
            assert config.RANDOM_LEVEL_MIN_SIZE <= columns <= config.RANDOM_LEVEL_MAX_SIZE

    def test_progression_table(self):
        progress = LevelProgress()
        first = progress.get_level_config(0)
        assert (first['rows'], first['columns']) == (config.BASE_ROWS, config.BASE_COLUMNS)
        assert first['algorithm'] is Algorithm.RECURSIVE_BACKTRACKER
        assert progress.get_level_config(3)['algorithm'] is Algorithm.RECURSIVE_DIVISION
        assert progress.get_level_config(4)['level_name'] == first['level_name']

    def test_progression_grows_and_caps(self):
        progress = LevelProgress()
        assert progress.get_level_config(config.LEVELS_PER_SIZE_STEP)['rows'] == config.BASE_ROWS + 2
        huge = progress.get_level_config(1000)
        assert huge['rows'] == config.MAX_ROWS
        assert huge['columns'] == config.MAX_COLUMNS

    def test_large_aldous_broder_levels_use_fallback(self):
        progress = LevelProgress()
        level_config = progress.get_level_config(42)
        assert level_config['theme_index'] == 2
        assert level_config['rows'] * level_config['columns'] > config.ALDOUS_BRODER_MAX_CELLS
        assert level_config['algorithm'].value == config.FALLBACK_ALGORITHM

    def test_generate_from_config(self):
        generator = LevelGenerator(world_seed=11)
        level = generator.generate_level_from_config(2)
        assert level.algorithm is Algorithm.ALDOUS_BRODER
        assert level.dimensions() == (config.BASE_ROWS + 2, config.BASE_COLUMNS + 2)


class TestConvenience:

    def test_generate_procedural_level(self):
        level = generate_procedural_level(0, rows=5, columns=5, algorithm='binary_tree', seed=8)
        assert level.dimensions() == (5, 5)
        assert level.algorithm is Algorithm.BINARY_TREE

    def test_set_world_seed_changes_levels(self, generator):
        before = generator.generate_level(0).seed
        generator.set_world_seed(generator.get_world_seed() + 1)
        assert generator.generate_level(0).seed != before
