from enum import IntEnum


class TileType(IntEnum):
    """Derived classification of a maze cell."""

    FLOOR = 0
    WALL = 1

    @property
    def is_solid(self) -> bool:
        """Return True if tile blocks movement completely."""
        return self == TileType.WALL

    @property
    def is_walkable(self) -> bool:
        return self == TileType.FLOOR

    @property
    def symbol(self) -> str:
        """Single-character form used by layout snapshots."""
        return '#' if self == TileType.WALL else '.'

    @classmethod
    def from_symbol(cls, symbol: str) -> "TileType":
        if symbol == '#':
            return cls.WALL
        if symbol == '.':
            return cls.FLOOR
        raise ValueError(f"Unknown tile symbol: {symbol!r}")

    @property
    def label(self) -> str:
        """Return human-readable name."""
        return {
            TileType.FLOOR: "Floor",
            TileType.WALL: "Wall",
        }[self]
