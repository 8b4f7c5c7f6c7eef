import pytest

from dama.engine.board import Board
from dama.engine.piece import P1_MAN, P2_MAN
from dama.game import Game, IllegalMoveError, paths_through
from dama.ui import PygameUI


def two_paths_game():
    # the man on (6,0) has two three-piece captures that both end on (4,4):
    # up via (4,0) and (4,2), or right via (6,2) and (4,2)
    b = Board().set_piece((6, 0), P1_MAN)
    for pos in [(5, 0), (4, 1), (4, 3), (6, 1), (5, 2)]:
        b = b.set_piece(pos, P2_MAN)
    return Game(board=b)


def test_paths_ending_on_same_square():
    g = two_paths_game()
    moves = g.legal_moves_from((6, 0))
    assert len(moves) == 3 and all(len(m) == 3 for m in moves)
    ending = [m for m in moves if m.to == (4, 4)]
    assert len(ending) == 2
    with pytest.raises(IllegalMoveError):
        g.play_intent((6, 0), (4, 4))

    up_first = paths_through(ending, (4, 0))
    assert len(up_first) == 1 and (5, 0) in up_first[0].captures
    right_first = paths_through(ending, (6, 1))
    assert len(right_first) == 1 and right_first[0].sequence[0].to == (6, 2)
    # shared landing square and the final square do not tell them apart
    assert paths_through(ending, (4, 2)) == ending
    assert paths_through(ending, (4, 4)) == []


def test_click_chooses_between_capture_paths():
    ui = PygameUI(two_paths_game())
    ui.handle_board_click((6, 0))
    assert ui.selected == (6, 0) and len(ui.legal_moves) == 3

    ui.handle_board_click((4, 4))
    assert not ui.animating
    assert len(ui.path_choices) == 2 and ui.legal_moves == ui.path_choices

    ui.handle_board_click((4, 2))
    assert not ui.animating and len(ui.path_choices) == 2

    ui.handle_board_click((6, 2))
    assert ui.animating
    assert ui.anim_move.sequence[0].to == (6, 2) and ui.anim_move.to == (4, 4)
    assert ui.path_choices == [] and ui.selected is None


def test_click_off_the_paths_cancels_choice():
    ui = PygameUI(two_paths_game())
    ui.handle_board_click((6, 0))
    ui.handle_board_click((4, 4))
    ui.handle_board_click((0, 7))
    assert not ui.animating
    assert ui.path_choices == [] and ui.selected is None and ui.legal_moves == []
