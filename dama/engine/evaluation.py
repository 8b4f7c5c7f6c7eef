"""Static evaluation of a Dama position."""
from dama.engine.board import Board, in_bounds
from dama.engine.piece import EMPTY, forward, is_king, owner_of

# Scored for a side that cannot move; larger than any positional score
WIN_SCORE = 10000

MAN_VALUE = 100
KING_BONUS = 150
ADVANCE_BONUS = 8
NEAR_PROMOTION_BONUS = 50
CENTER_BONUS = 15
EDGE_BONUS = 5
PROTECTED_BONUS = 20


def is_protected(board: Board, row: int, col: int) -> bool:
    """True if an orthogonal neighbour holds a friendly piece."""
    player = owner_of(board.grid[row][col])
    for dr, dc in ((1, 0), (-1, 0), (0, 1), (0, -1)):
        r, c = row + dr, col + dc
        if in_bounds((r, c)) and owner_of(board.grid[r][c]) == player:
            return True
    return False


def piece_score(board: Board, row: int, col: int) -> int:
    piece = board.grid[row][col]
    score = MAN_VALUE
    if is_king(piece):
        score += KING_BONUS
    else:
        # rows travelled from the owner's back rank
        travelled = row if forward(owner_of(piece)) > 0 else Board.SIZE - 1 - row
        score += travelled * ADVANCE_BONUS
        # within two rows of the far rank
        if travelled >= Board.SIZE - 3:
            score += NEAR_PROMOTION_BONUS
    if 1 < col < 6:
        score += CENTER_BONUS
    if col in (0, Board.SIZE - 1):
        score += EDGE_BONUS
    if is_protected(board, row, col):
        score += PROTECTED_BONUS
    return score


def evaluate(board: Board, player: int) -> int:
    """Score `board` from `player`'s point of view: own pieces add, the opponent's subtract."""
    score = 0
    for r in range(Board.SIZE):
        for c in range(Board.SIZE):
            if board.grid[r][c] == EMPTY:
                continue
            value = piece_score(board, r, c)
            score += value if owner_of(board.grid[r][c]) == player else -value
    return score
