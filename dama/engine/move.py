from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

Pos = Tuple[int, int]  # (row, col)


@dataclass(frozen=True)
class Step:
    """One hop of a move.
    captured: square of the jumped opponent piece, None for a plain step
    """
    to: Pos
    captured: Optional[Pos] = None

    def is_capture(self) -> bool:
        return self.captured is not None

    def to_dict(self) -> Dict[str, int]:
        d = {'toRow': self.to[0], 'toCol': self.to[1]}
        if self.captured is not None:
            d['capturedRow'] = self.captured[0]
            d['capturedCol'] = self.captured[1]
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Step':
        try:
            to = (int(data['toRow']), int(data['toCol']))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed step: {data!r}") from e
        captured = None
        if data.get('capturedRow') is not None and data.get('capturedCol') is not None:
            captured = (int(data['capturedRow']), int(data['capturedCol']))
        return cls(to, captured)


@dataclass(frozen=True)
class Move:
    """Represents a move of one piece.
    sequence: ordered steps; more than one step is a multi-jump executed atomically
    """
    frm: Pos
    sequence: Tuple[Step, ...]

    def __post_init__(self):
        if not self.sequence:
            raise ValueError("Move needs at least one step")
        # accept lists from callers but keep the dataclass hashable
        object.__setattr__(self, 'sequence', tuple(self.sequence))

    @property
    def to(self) -> Pos:
        """Final landing square."""
        return self.sequence[-1].to

    @property
    def captures(self) -> List[Pos]:
        return [s.captured for s in self.sequence if s.captured is not None]

    def is_capture(self) -> bool:
        return self.sequence[0].is_capture()

    def __len__(self) -> int:
        return len(self.sequence)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'fromRow': self.frm[0],
            'fromCol': self.frm[1],
            'sequence': [s.to_dict() for s in self.sequence],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Move':
        try:
            frm = (int(data['fromRow']), int(data['fromCol']))
            steps = data['sequence']
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed move: {data!r}") from e
        return cls(frm, tuple(Step.from_dict(s) for s in steps))

    def __repr__(self):
        path = ' -> '.join(str(s.to) for s in self.sequence)
        return f"Move({self.frm} -> {path}, captures={self.captures})"
