"""
Seed Manager - world seed, per-level seeds and one random stream per generation phase
"""

import hashlib
import random
from typing import Any, Dict, Optional

# Phases that get a dedicated stream; others are derived on first use
COMPONENTS = ('structure', 'placement')


def _hash_seed(seed_string: str) -> int:
    return int(hashlib.md5(seed_string.encode()).hexdigest()[:8], 16)


class SeedManager:
    """
    Derives every random stream of a session from a single world seed.

    A level seed is md5("<world>_level_<index>"); each phase then draws from its
    own random.Random seeded with md5("<level>_<phase>"), so carving more or
    fewer cells never shifts the placement stream.
    """

    def __init__(self, world_seed: Optional[int] = None):
        """
        Args:
            world_seed: Seed for the whole session; drawn at random when None
        """
        if world_seed is None:
            world_seed = random.randint(0, 2**31 - 1)
        self.world_seed = world_seed
        self.current_level_seed: Optional[int] = None
        self.sub_seeds: Dict[str, int] = {}
        self._streams: Dict[str, random.Random] = {}

    def _forget_level(self, level_seed: Optional[int]) -> None:
        self.current_level_seed = level_seed
        self.sub_seeds = {}
        self._streams = {}

    def generate_level_seed(self, level_index: int) -> int:
        """
        Level seed for level_index under the current world seed.

        Also makes it the active level seed (see use_level_seed).
        """
        level_seed = _hash_seed(f"{self.world_seed}_level_{level_index}")
        self._forget_level(level_seed)
        return level_seed

    def use_level_seed(self, level_seed: int) -> None:
        """
        Make level_seed the active seed, e.g. when rebuilding a saved level.

        Streams handed out for the previous level are dropped, so the next
        get_random() call starts from the beginning of a fresh stream.
        """
        self._forget_level(level_seed)

    def generate_sub_seeds(self, level_seed: int) -> Dict[str, int]:
        """Seeds for the 'structure' and 'placement' phases of level_seed."""
        self.sub_seeds = {name: _hash_seed(f"{level_seed}_{name}") for name in COMPONENTS}
        return self.sub_seeds

    def get_random(self, component: str) -> random.Random:
        """
        The random stream for one phase of the active level.

        Repeated calls return the same object, so a phase consumes its stream
        across calls.

        Raises:
            RuntimeError: No level seed is active yet
        """
        if self.current_level_seed is None:
            raise RuntimeError("No level seed; call generate_level_seed() or use_level_seed() first")

        stream = self._streams.get(component)
        if stream is None:
            seed = self.sub_seeds.setdefault(component, _hash_seed(f"{self.current_level_seed}_{component}"))
            stream = self._streams[component] = random.Random(seed)
        return stream

    def get_world_seed(self) -> int:
        return self.world_seed

    def get_level_seed(self) -> Optional[int]:
        return self.current_level_seed

    def set_world_seed(self, seed: int):
        """Switch worlds; no level seed is active afterwards."""
        self.world_seed = seed
        self._forget_level(None)

    def get_seed_info(self) -> Dict[str, Any]:
        """World seed, active level seed (when there is one) and phase seeds."""
        info: Dict[str, Any] = {'world_seed': self.world_seed, 'sub_seeds': dict(self.sub_seeds)}
        if self.current_level_seed is not None:
            info['level_seed'] = self.current_level_seed
        return info
