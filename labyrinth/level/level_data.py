"""
Level data structures for saving and restoring generated levels.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .placement import PlacementResult

SAVE_FORMAT_VERSION = 1


@dataclass(frozen=True)
class LevelRecord:
    """
    Minimal save state: enough to regenerate a level deterministically.

    Attributes:
        rows: Grid rows
        columns: Grid columns
        seed: Level seed
        algorithm: Algorithm value actually used to carve the level
    """
    rows: int
    columns: int
    seed: int
    algorithm: str

    def to_dict(self) -> Dict[str, Any]:
        return {'rows': self.rows, 'columns': self.columns, 'seed': self.seed, 'algorithm': self.algorithm}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LevelRecord":
        return cls(
            rows=int(data['rows']),
            columns=int(data['columns']),
            seed=int(data['seed']),
            algorithm=str(data['algorithm']),
        )


@dataclass
class LayoutSnapshot:
    """
    Explicit Wall/Floor layout plus placement.

    Used when regeneration across versions cannot be trusted to reproduce the
    same level.

    Attributes:
        record: The regeneration record
        layout: One string per row, '#' for Wall and '.' for Floor
        placement: Spawn/exit record
    """
    record: LevelRecord
    layout: List[str] = field(default_factory=list)
    placement: Optional[PlacementResult] = None

    @property
    def dimensions(self) -> Tuple[int, int]:
        return (self.record.rows, self.record.columns)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'record': self.record.to_dict(),
            'layout': list(self.layout),
            'placement': self.placement.to_dict() if self.placement else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutSnapshot":
        placement = data.get('placement')
        snapshot = cls(
            record=LevelRecord.from_dict(data['record']),
            layout=list(data.get('layout', [])),
            placement=PlacementResult.from_dict(placement) if placement else None,
        )
        rows, columns = snapshot.dimensions
        if snapshot.layout and (len(snapshot.layout) != rows or any(len(r) != columns for r in snapshot.layout)):
            raise ValueError(f"Layout does not match {rows}x{columns} record")
        return snapshot


def save_levels(path: Union[str, Path], snapshots: List[LayoutSnapshot]) -> Path:
    """
    Write snapshots to a JSON file, creating parent directories as needed.

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        'version': SAVE_FORMAT_VERSION,
        'levels': [snapshot.to_dict() for snapshot in snapshots],
    }
    path.write_text(json.dumps(payload, indent=2))
    return path


def load_levels(path: Union[str, Path]) -> List[LayoutSnapshot]:
    """
    Read snapshots written by save_levels().

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file uses an unknown format version
    """
    data = json.loads(Path(path).read_text())
    version = data.get('version')
    if version != SAVE_FORMAT_VERSION:
        raise ValueError(f"Unsupported levels file version: {version}")
    return [LayoutSnapshot.from_dict(level) for level in data.get('levels', [])]
