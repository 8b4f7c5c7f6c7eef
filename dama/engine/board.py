from typing import Iterator, List, Sequence, Tuple
from dama.engine.piece import (EMPTY, P1_MAN, P2_MAN, PIECE_CODES, PLAYER_1, PLAYER_2,
                               king_of, owner_of)
from dama.engine.move import Pos, Step


Grid = Tuple[Tuple[int, ...], ...]


def in_bounds(pos: Pos) -> bool:
    r, c = pos
    return 0 <= r < Board.SIZE and 0 <= c < Board.SIZE


class Board:
    """Immutable 8x8 grid of piece codes.

    Every transformation returns a new Board, so a snapshot handed to the
    search or to another thread can never change under it.
    """
    SIZE = 8

    __slots__ = ('grid', '_fingerprint')

    def __init__(self, grid: Sequence[Sequence[int]] = None):
        if grid is None:
            grid = [[EMPTY] * self.SIZE for _ in range(self.SIZE)]
        self.grid: Grid = tuple(tuple(row) for row in grid)
        self._fingerprint = None

    @classmethod
    def setup_start(cls) -> 'Board':
        rows = [[EMPTY] * cls.SIZE for _ in range(cls.SIZE)]
        # Dama uses every square: player 2 on rows 1..2, player 1 on rows 5..6
        for r in (1, 2):
            rows[r] = [P2_MAN] * cls.SIZE
        for r in (5, 6):
            rows[r] = [P1_MAN] * cls.SIZE
        return cls(rows)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> 'Board':
        """Build a board from untrusted data (e.g. a relayed game state)."""
        if len(rows) != cls.SIZE or any(len(row) != cls.SIZE for row in rows):
            raise ValueError(f"Board must be {cls.SIZE}x{cls.SIZE}")
        for row in rows:
            for v in row:
                if v not in PIECE_CODES:
                    raise ValueError(f"Unknown piece code: {v!r}")
        return cls(rows)

    def to_rows(self) -> List[List[int]]:
        return [list(row) for row in self.grid]

    def get_piece(self, pos: Pos) -> int:
        r, c = pos
        if 0 <= r < self.SIZE and 0 <= c < self.SIZE:
            return self.grid[r][c]
        return EMPTY

    def set_piece(self, pos: Pos, piece: int) -> 'Board':
        """Return a copy of the board with `piece` placed at `pos`."""
        if not in_bounds(pos):
            raise IndexError("Position out of board")
        rows = self.to_rows()
        rows[pos[0]][pos[1]] = piece
        return Board(rows)

    def apply_step(self, frm: Pos, step: Step) -> 'Board':
        """Move the piece on `frm` along one step, clearing the captured square
        and promoting a man that lands on its far rank. Legality is the caller's job.
        """
        rows = self.to_rows()
        piece = rows[frm[0]][frm[1]]
        rows[frm[0]][frm[1]] = EMPTY
        if step.captured is not None:
            rows[step.captured[0]][step.captured[1]] = EMPTY
        tr, tc = step.to
        if piece == P1_MAN and tr == 0:
            piece = king_of(PLAYER_1)
        elif piece == P2_MAN and tr == self.SIZE - 1:
            piece = king_of(PLAYER_2)
        rows[tr][tc] = piece
        return Board(rows)

    def pieces(self, player: int) -> Iterator[Tuple[Pos, int]]:
        for r in range(self.SIZE):
            for c in range(self.SIZE):
                p = self.grid[r][c]
                if owner_of(p) == player:
                    yield (r, c), p

    def count_pieces(self, player: int) -> int:
        return sum(1 for _ in self.pieces(player))

    def fingerprint(self) -> str:
        if self._fingerprint is None:
            self._fingerprint = ''.join(str(v) for row in self.grid for v in row)
        return self._fingerprint

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def __hash__(self):
        return hash(self.grid)

    def __repr__(self):
        symbols = {EMPTY: '.', 1: 'w', 2: 'b', 3: 'W', 4: 'B'}
        return '\n'.join(''.join(symbols.get(v, '?') for v in row) for row in self.grid)
