"""
Error taxonomy for level generation.

Generation-time errors abort level creation and reach the caller, which may
retry with another seed or algorithm. Out-of-bounds queries are not errors and
return None instead.
"""


class LevelGenerationError(Exception):
    """Base class for all level generation failures."""


class InvalidDimension(LevelGenerationError, ValueError):
    """Grid rows or columns were not positive integers."""

    def __init__(self, rows, columns):
        self.rows = rows
        self.columns = columns
        super().__init__(f"Grid dimensions must be positive integers, got {rows}x{columns}")


class DisconnectedGraph(LevelGenerationError):
    """Floor cells are split into several components, or contain a cycle where a tree was required."""

    def __init__(self, message: str, component_count: int = 0, floor_count: int = 0, edge_count: int = 0):
        self.component_count = component_count
        self.floor_count = floor_count
        self.edge_count = edge_count
        super().__init__(message)


class GenerationFailed(LevelGenerationError):
    """A generation step exceeded its iteration bound."""
