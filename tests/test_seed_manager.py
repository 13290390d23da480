import unittest

from labyrinth.level.seed_manager import COMPONENTS, SeedManager


class TestSeedManager(unittest.TestCase):

    def setUp(self):
        self.manager = SeedManager(world_seed=12345)

    def test_world_seed_kept(self):
        self.assertEqual(self.manager.get_world_seed(), 12345)

    def test_random_world_seed_when_none(self):
        manager = SeedManager()
        self.assertIsInstance(manager.get_world_seed(), int)
        self.assertGreaterEqual(manager.get_world_seed(), 0)

    def test_level_seed_is_deterministic(self):
        other = SeedManager(world_seed=12345)
        for index in range(5):
            self.assertEqual(self.manager.generate_level_seed(index), other.generate_level_seed(index))

    def test_level_seeds_differ_by_index(self):
        seeds = {self.manager.generate_level_seed(index) for index in range(20)}
        self.assertEqual(len(seeds), 20)

    def test_level_seeds_differ_by_world(self):
        other = SeedManager(world_seed=54321)
        self.assertNotEqual(self.manager.generate_level_seed(0), other.generate_level_seed(0))

    def test_level_seed_fits_32_bits(self):
        seed = self.manager.generate_level_seed(3)
        self.assertTrue(0 <= seed < 2**32)
        self.assertEqual(self.manager.get_level_seed(), seed)

    def test_sub_seeds_cover_components(self):
        level_seed = self.manager.generate_level_seed(0)
        sub_seeds = self.manager.generate_sub_seeds(level_seed)
        self.assertEqual(set(sub_seeds), set(COMPONENTS))
        self.assertNotEqual(sub_seeds['structure'], sub_seeds['placement'])

    def test_random_requires_level_seed(self):
        with self.assertRaises(RuntimeError):
            self.manager.get_random('structure')

    def test_random_is_reused_per_component(self):
        self.manager.generate_level_seed(0)
        self.assertIs(self.manager.get_random('structure'), self.manager.get_random('structure'))
        self.assertIsNot(self.manager.get_random('structure'), self.manager.get_random('placement'))

    def test_random_streams_reproduce(self):
        self.manager.generate_level_seed(2)
        first = [self.manager.get_random('structure').random() for _ in range(5)]
        self.manager.generate_level_seed(2)
        second = [self.manager.get_random('structure').random() for _ in range(5)]
        self.assertEqual(first, second)

    def test_unknown_component_gets_its_own_stream(self):
        self.manager.generate_level_seed(0)
        self.manager.get_random('dimensions')
        self.assertIn('dimensions', self.manager.get_seed_info()['sub_seeds'])

    def test_explicit_level_seed_ignores_world_seed(self):
        other = SeedManager(world_seed=1)
        self.manager.use_level_seed(777)
        other.use_level_seed(777)
        self.assertEqual(self.manager.get_random('placement').random(), other.get_random('placement').random())

    def test_set_world_seed_clears_level_state(self):
        self.manager.generate_level_seed(0)
        self.manager.set_world_seed(99)
        self.assertEqual(self.manager.get_world_seed(), 99)
        self.assertIsNone(self.manager.get_level_seed())
        self.assertNotIn('level_seed', self.manager.get_seed_info())


if __name__ == '__main__':
    unittest.main()
