"""
Level Progression System - grid size and algorithm variety by depth
"""

from typing import Any, Dict

import config
from .generation_algorithms import Algorithm


class LevelProgress:
    """Maps a level index to the grid size and algorithm used to build it"""

    def __init__(self):
        # Cycle of level themes and the algorithm that carves each
        self.level_themes = {
            0: {"name": "Winding Cellars", "algorithm": Algorithm.RECURSIVE_BACKTRACKER},
            1: {"name": "Northern Galleries", "algorithm": Algorithm.BINARY_TREE},
            2: {"name": "Wandering Halls", "algorithm": Algorithm.ALDOUS_BRODER},
            3: {"name": "Partitioned Vaults", "algorithm": Algorithm.RECURSIVE_DIVISION},
        }

    def get_level_config(self, level_index: int) -> Dict[str, Any]:
        """
        Get configuration for a specific level

        Returns:
            Dictionary with level size, algorithm and theme info
        """
        theme_index = level_index % len(self.level_themes)
        theme = self.level_themes[theme_index]

        growth = 2 * (level_index // config.LEVELS_PER_SIZE_STEP)
        rows = min(config.BASE_ROWS + growth, config.MAX_ROWS)
        columns = min(config.BASE_COLUMNS + growth, config.MAX_COLUMNS)

        algorithm = theme["algorithm"]
        if algorithm == Algorithm.ALDOUS_BRODER and rows * columns > config.ALDOUS_BRODER_MAX_CELLS:
            algorithm = Algorithm.parse(config.FALLBACK_ALGORITHM)

        return {
            "level_index": level_index,
            "level_name": theme["name"],
            "theme_index": theme_index,
            "rows": rows,
            "columns": columns,
            "algorithm": algorithm,
        }
