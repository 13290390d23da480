import os

# Grid defaults
DEFAULT_ROWS = int(os.environ.get('LABYRINTH_ROWS', 10))
DEFAULT_COLUMNS = int(os.environ.get('LABYRINTH_COLUMNS', 10))
DEFAULT_ALGORITHM = os.environ.get('LABYRINTH_DEFAULT_ALGORITHM', 'recursive_backtracker')
DEFAULT_SPAWN = (0, 0)

# Random-level size range (inclusive)
RANDOM_LEVEL_MIN_SIZE = 8
RANDOM_LEVEL_MAX_SIZE = 20

# Aldous-Broder has no hard runtime bound; cap the walk and fall back
ALDOUS_BRODER_STEPS_PER_CELL = 250
ALDOUS_BRODER_MAX_CELLS = 900
FALLBACK_ALGORITHM = 'recursive_backtracker'

# Recursive division
DIVISION_MINIMUM_SIZE = 2
DIVISION_ROOM_CHANCE = 0.25

# Level progression
BASE_ROWS = 8
BASE_COLUMNS = 8
MAX_ROWS = 40
MAX_COLUMNS = 60
LEVELS_PER_SIZE_STEP = 2

# Rendering
TILE = 24
WALL_THICKNESS = 2
WIDTH, HEIGHT = 960, 720
FPS = 30

BG = (18, 18, 24)
WHITE = (235, 235, 235)
FLOOR_COLOR = (58, 52, 46)
WALL_COLOR = (26, 26, 32)
WALL_LINE_COLOR = (200, 190, 170)
SPAWN_COLOR = (90, 200, 120)
EXIT_COLOR = (220, 90, 80)

# Logging
LOG_LEVEL = os.environ.get('LABYRINTH_LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'
