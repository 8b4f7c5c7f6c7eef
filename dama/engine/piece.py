"""Piece codes used on the board grid.

Cells hold small integers so a board can be shipped as-is to the browser
front-end or the room relay:
  0 empty, 1 player-1 man, 2 player-2 man, 3 player-1 king, 4 player-2 king
"""

EMPTY = 0
P1_MAN = 1
P2_MAN = 2
P1_KING = 3
P2_KING = 4

PLAYER_1 = 1
PLAYER_2 = 2

PIECE_CODES = (EMPTY, P1_MAN, P2_MAN, P1_KING, P2_KING)


def owner_of(piece: int) -> int:
    """Return 1 or 2 for the player owning `piece`, 0 for an empty cell."""
    if piece in (P1_MAN, P1_KING):
        return PLAYER_1
    if piece in (P2_MAN, P2_KING):
        return PLAYER_2
    return 0


def is_king(piece: int) -> bool:
    return piece in (P1_KING, P2_KING)


def opponent(player: int) -> int:
    return PLAYER_2 if player == PLAYER_1 else PLAYER_1


def king_of(player: int) -> int:
    return P1_KING if player == PLAYER_1 else P2_KING


def forward(player: int) -> int:
    # player 1 promotes on row 0, player 2 on row 7
    return -1 if player == PLAYER_1 else 1
