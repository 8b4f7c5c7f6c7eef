from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple
from dama.engine.board import Board, in_bounds
from dama.engine.move import Move, Pos, Step
from dama.engine.piece import EMPTY, PLAYER_1, PLAYER_2, forward, is_king, opponent, owner_of


ORTHOGONAL = [(1, 0), (-1, 0), (0, 1), (0, -1)]


@dataclass
class MoveSet:
    """Everything a player may do on a board.
    mandatory: origin squares of the longest captures (empty without captures)
    max_capture: length of the longest capture chain, 0 if none
    """
    moves: List[Move] = field(default_factory=list)
    mandatory: List[Pos] = field(default_factory=list)
    max_capture: int = 0

    def __bool__(self):
        return bool(self.moves)

    def __len__(self):
        return len(self.moves)

    def __iter__(self):
        return iter(self.moves)

    def moves_from(self, pos: Pos) -> List[Move]:
        return [m for m in self.moves if m.frm == pos]


def _directions_for_piece(piece: int) -> List[Tuple[int, int]]:
    # Kings go all four ways; men go forward or sideways, never backward
    if is_king(piece):
        return ORTHOGONAL
    return [(forward(owner_of(piece)), 0), (0, 1), (0, -1)]


def _find_captures_from(board: Board, start: Pos, piece: int, current: Pos,
                        sequence: Tuple[Step, ...], captured: FrozenSet[Pos],
                        visited: FrozenSet[Pos], results: List[Move]) -> None:
    """Depth-first search for capture chains continuing from `current`.

    Captured pieces stay on the board until the move commits, so `captured`
    is what keeps them from being jumped twice. Each branch gets its own sets.
    """
    visited = visited | {current}
    enemy = opponent(owner_of(piece))
    king = is_king(piece)
    found_any = False
    for dr, dc in _directions_for_piece(piece):
        r, c = current[0] + dr, current[1] + dc
        # kings slide over empty squares up to the first occupied one
        while king and in_bounds((r, c)) and board.grid[r][c] == EMPTY:
            r, c = r + dr, c + dc
        if not in_bounds((r, c)):
            continue
        target = (r, c)
        if owner_of(board.grid[r][c]) != enemy or target in captured:
            continue
        land = (r + dr, c + dc)
        if not in_bounds(land) or board.grid[land[0]][land[1]] != EMPTY or land in visited:
            continue
        found_any = True
        _find_captures_from(board, start, piece, land,
                            sequence + (Step(land, target),),
                            captured | {target}, visited, results)
    if not found_any and sequence:
        results.append(Move(start, sequence))


def find_captures(board: Board, start: Pos) -> List[Move]:
    """Return every maximal capture chain for the piece on `start`."""
    piece = board.get_piece(start)
    if piece == EMPTY:
        return []
    results: List[Move] = []
    _find_captures_from(board, start, piece, start, (), frozenset(), frozenset(), results)
    return results


def find_simple_moves(board: Board, start: Pos) -> List[Move]:
    piece = board.get_piece(start)
    if piece == EMPTY:
        return []
    moves: List[Move] = []
    for dr, dc in _directions_for_piece(piece):
        to = (start[0] + dr, start[1] + dc)
        while in_bounds(to) and board.get_piece(to) == EMPTY:
            moves.append(Move(start, (Step(to),)))
            if not is_king(piece):
                break
            to = (to[0] + dr, to[1] + dc)
    return moves


def generate_move_set(board: Board, player: int) -> MoveSet:
    """Generate the move-set for `player`.

    Captures are mandatory and the longest chain wins: when any piece can
    capture, only chains of the global maximum length are returned, from
    every piece that reaches it.
    """
    result = MoveSet()
    for pos, _ in board.pieces(player):
        caps = find_captures(board, pos)
        if not caps:
            continue
        longest = max(len(m) for m in caps)
        if longest > result.max_capture:
            result = MoveSet([m for m in caps if len(m) == longest], [pos], longest)
        elif longest == result.max_capture:
            result.moves.extend(m for m in caps if len(m) == longest)
            result.mandatory.append(pos)
    if result.max_capture == 0:
        for pos, _ in board.pieces(player):
            result.moves.extend(find_simple_moves(board, pos))
    return result


def generate_legal_moves(board: Board, player: int) -> List[Move]:
    return generate_move_set(board, player).moves


def apply_move(board: Board, move: Move) -> Board:
    if owner_of(board.get_piece(move.frm)) == 0:
        raise ValueError("No piece at move.frm")
    current = move.frm
    for step in move.sequence:
        board = board.apply_step(current, step)
        current = step.to
    return board


def has_any_moves(board: Board, player: int) -> bool:
    """Return True if `player` has any legal move."""
    return bool(generate_move_set(board, player))


def count_pieces(board: Board, player: int) -> int:
    """Count pieces of a given player on the board."""
    return board.count_pieces(player)


def determine_winner(board: Board, to_move: int) -> Optional[int]:
    """Determine the winner of the game if any.

    Returns 1 or 2 for the winning player, None if the game goes on.
    There are no draws: a player without pieces, or without a legal move
    on their turn, loses.
    """
    for player in (PLAYER_1, PLAYER_2):
        if count_pieces(board, player) == 0:
            return opponent(player)
    if not has_any_moves(board, to_move):
        return opponent(to_move)
    return None
