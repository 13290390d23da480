import argparse
import logging
import sys

import pygame

import config
from config import WIDTH, HEIGHT, FPS, BG, WHITE
from labyrinth.level import Algorithm, LevelGenerator, LevelGenerationError
from labyrinth.tiles import TileRenderer, render_ascii

logger = logging.getLogger(__name__)


class MazeViewer:
    """Preview window: shows one generated level at a time."""

    def __init__(self, generator: LevelGenerator, level_index: int = 0):
        pygame.init()
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Labyrinth")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 22)
        self.generator = generator
        self.renderer = TileRenderer()
        self.level_index = level_index
        self.level = None
        self.message = ""
        self.regenerate()

    def regenerate(self):
        try:
            self.level = self.generator.generate_level(self.level_index)
            self.message = ""
        except LevelGenerationError as exc:
            # Keep the previous level on screen
            self.message = f"Generation failed: {exc}"
        rows, columns = self.level.dimensions() if self.level else (0, 0)
        # Shrink tiles so the whole maze fits the window
        if rows and columns:
            fit = min((WIDTH - 40) // columns, (HEIGHT - 80) // rows)
            self.renderer = TileRenderer(max(4, min(config.TILE, fit)))

    def cycle_algorithm(self):
        variants = list(Algorithm)
        current = variants.index(self.generator.algorithm)
        self.generator.algorithm = variants[(current + 1) % len(variants)]
        self.regenerate()

    def handle_key(self, key) -> bool:
        if key == pygame.K_ESCAPE:
            return False
        if key == pygame.K_n:
            self.level_index += 1
            self.regenerate()
        elif key == pygame.K_r:
            self.generator.set_world_seed(self.generator.get_world_seed() + 1)
            self.regenerate()
        elif key == pygame.K_a:
            self.cycle_algorithm()
        elif key == pygame.K_s and self.level:
            self.renderer.save_png(self.level, f"screenshots/level_{self.level_index}_{self.level.seed}.png")
        return True

    def draw(self):
        self.screen.fill(BG)
        if self.level:
            surface = self.renderer.build_surface(self.level)
            x = (WIDTH - surface.get_width()) // 2
            self.screen.blit(surface, (x, 60))
            stats = self.level.stats
            header = (f"Level {self.level_index}  {self.level.algorithm.display_name}  seed {self.level.seed}  "
                      f"dead ends {stats.get('dead_ends', 0)}  exit distance {self.level.placement.distance}")
            self.screen.blit(self.font.render(header, True, WHITE), (20, 12))
        help_text = "N next level   R new world seed   A algorithm   S screenshot   Esc quit"
        self.screen.blit(self.font.render(self.message or help_text, True, WHITE), (20, 34))
        pygame.display.flip()

    def run(self):
        running = True
        while running:
            self.clock.tick(FPS)
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                elif ev.type == pygame.KEYDOWN:
                    running = self.handle_key(ev.key)
            self.draw()
        pygame.quit()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate and preview maze levels")
    parser.add_argument('--rows', type=int, default=config.DEFAULT_ROWS)
    parser.add_argument('--columns', type=int, default=config.DEFAULT_COLUMNS)
    parser.add_argument('--algorithm', default=config.DEFAULT_ALGORITHM,
                        help="one of: " + ", ".join(a.value for a in Algorithm))
    parser.add_argument('--seed', type=int, default=None, help="world seed")
    parser.add_argument('--level', type=int, default=0, help="level index")
    parser.add_argument('--ascii', action='store_true', help="print the level and exit")
    parser.add_argument('--save', metavar='PATH', help="write a PNG preview and exit")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    args = parse_args(argv)

    try:
        generator = LevelGenerator(rows=args.rows, columns=args.columns,
                                   algorithm=args.algorithm, world_seed=args.seed)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    if args.ascii or args.save:
        try:
            level = generator.generate_level(args.level)
        except LevelGenerationError:
            return 1
        if args.ascii:
            print(render_ascii(level.grid, level.placement))
            print(f"seed={level.seed} algorithm={level.algorithm.value} "
                  f"spawn={level.spawn} exit={level.exit}")
        if args.save:
            TileRenderer().save_png(level, args.save)
        return 0

    MazeViewer(generator, args.level).run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
