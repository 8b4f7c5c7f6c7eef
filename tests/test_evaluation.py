from dama.engine.board import Board
from dama.engine.evaluation import WIN_SCORE, evaluate, is_protected, piece_score
from dama.engine.piece import P1_KING, P1_MAN, P2_KING, P2_MAN


def test_empty_and_start_positions_are_even():
    assert evaluate(Board(), 1) == 0
    assert evaluate(Board.setup_start(), 1) == 0
    assert evaluate(Board.setup_start(), 2) == 0


def test_piece_terms():
    b = Board().set_piece((6, 3), P2_MAN).set_piece((7, 0), P1_MAN)
    # 100 base + 6 rows * 8 + 50 near promotion + 15 center
    assert piece_score(b, 6, 3) == 213
    # 100 base + 5 edge, still on its back rank
    assert piece_score(b, 7, 0) == 105
    assert evaluate(b, 2) == 213 - 105
    assert evaluate(b, 1) == -(213 - 105)


def test_near_promotion_bonus_covers_two_rows():
    def lone(pos, piece):
        return piece_score(Board().set_piece(pos, piece), *pos)

    # two rows from the far rank: 5 rows travelled + 50
    assert lone((2, 0), P1_MAN) == 195
    assert lone((2, 0), P1_MAN) - lone((3, 0), P1_MAN) == 8 + 50
    assert lone((5, 7), P2_MAN) == 195
    # three rows out: only the advance term grows
    assert lone((3, 0), P1_MAN) - lone((4, 0), P1_MAN) == 8
    assert lone((4, 7), P2_MAN) - lone((3, 7), P2_MAN) == 8


def test_protection_bonus():
    b = Board().set_piece((6, 3), P2_MAN).set_piece((6, 4), P2_MAN)
    assert is_protected(b, 6, 3)
    assert piece_score(b, 6, 3) == 233
    b = Board().set_piece((6, 3), P2_MAN).set_piece((6, 4), P1_MAN)
    assert not is_protected(b, 6, 3)


def test_king_outweighs_man():
    man = Board().set_piece((3, 3), P1_MAN)
    king = Board().set_piece((3, 3), P1_KING)
    assert evaluate(king, 1) > evaluate(man, 1)


def test_positional_scores_stay_below_win_score():
    b = Board()
    for r in range(2):
        for c in range(Board.SIZE):
            b = b.set_piece((r + 3, c), P2_KING)
    assert b.count_pieces(2) == 16
    assert abs(evaluate(b, 1)) < WIN_SCORE
    assert abs(evaluate(b, 2)) < WIN_SCORE
