"""Maze level generation for turn-based dungeon games."""
