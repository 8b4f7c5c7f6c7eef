from dama.engine.board import Board
from dama.engine.move import Move, Step
from dama.engine.piece import EMPTY, P1_KING, P1_MAN, P2_KING, P2_MAN
from dama.engine.rules import (apply_move, determine_winner, find_captures, generate_legal_moves,
                               generate_move_set)


def make_board(pieces):
    b = Board()
    for pos, piece in pieces.items():
        b = b.set_piece(pos, piece)
    return b


def assert_capture_legality(moves):
    for m in moves:
        captured = m.captures
        landings = [m.frm] + [s.to for s in m.sequence]
        assert len(captured) == len(set(captured))
        assert len(landings) == len(set(landings))


def test_simple_moves_forward_and_sideways():
    b = make_board({(5, 1): P1_MAN})
    moves = generate_legal_moves(b, 1)
    assert sorted(m.to for m in moves) == [(4, 1), (5, 0), (5, 2)]
    assert all(len(m) == 1 and not m.is_capture() for m in moves)


def test_player_two_men_move_down():
    b = make_board({(2, 4): P2_MAN})
    assert sorted(m.to for m in generate_legal_moves(b, 2)) == [(2, 3), (2, 5), (3, 4)]


def test_blocked_man_has_no_moves():
    b = make_board({(5, 1): P1_MAN, (4, 1): P1_MAN, (5, 0): P1_MAN, (5, 2): P1_MAN})
    move_set = generate_move_set(b, 1)
    assert move_set.moves_from((5, 1)) == []
    assert move_set.moves_from((4, 1))


def test_king_slides_until_blocked():
    b = make_board({(3, 3): P1_KING})
    assert len(generate_legal_moves(b, 1)) == 14
    b = make_board({(3, 3): P1_KING, (3, 5): P1_MAN})
    targets = {m.to for m in generate_move_set(b, 1).moves_from((3, 3))}
    assert (3, 4) in targets and (3, 5) not in targets and (3, 6) not in targets


def test_opening_position_only_front_row_moves():
    b = Board.setup_start()
    move_set = generate_move_set(b, 1)
    assert move_set.max_capture == 0
    assert move_set.mandatory == []
    assert len(move_set) == 8
    assert all(m.frm[0] == 5 and m.to == (4, m.frm[1]) for m in move_set)


def test_forced_single_capture_excludes_normal_moves():
    b = make_board({
        (3, 3): P2_MAN,
        (1, 0): P2_MAN,
        (4, 3): P1_MAN,
        (6, 6): P1_MAN,
    })
    move_set = generate_move_set(b, 2)
    assert move_set.max_capture == 1
    assert move_set.mandatory == [(3, 3)]
    assert move_set.moves == [Move((3, 3), (Step((5, 3), (4, 3)),))]


def test_sideways_capture():
    b = make_board({(3, 3): P2_MAN, (3, 4): P1_MAN})
    moves = generate_legal_moves(b, 2)
    assert [(m.to, m.captures) for m in moves] == [((3, 5), [(3, 4)])]


def test_man_never_captures_backward():
    b = make_board({(4, 3): P1_MAN, (5, 3): P2_MAN})
    move_set = generate_move_set(b, 1)
    assert move_set.max_capture == 0
    assert all(not m.is_capture() for m in move_set)


def test_multi_jump():
    b = make_board({(6, 1): P1_MAN, (5, 1): P2_MAN, (3, 1): P2_MAN})
    moves = generate_legal_moves(b, 1)
    assert len(moves) == 1
    m = moves[0]
    assert m.frm == (6, 1) and m.to == (2, 1)
    assert m.captures == [(5, 1), (3, 1)]


def test_longest_capture_is_mandatory_across_pieces():
    b = make_board({
        (6, 1): P1_MAN, (5, 1): P2_MAN, (3, 1): P2_MAN,
        (6, 5): P1_MAN, (5, 5): P2_MAN,
    })
    move_set = generate_move_set(b, 1)
    assert move_set.max_capture == 2
    assert move_set.mandatory == [(6, 1)]
    assert all(len(m) == 2 for m in move_set)


def test_equal_captures_from_several_pieces_are_all_offered():
    b = make_board({
        (6, 1): P1_MAN, (5, 1): P2_MAN,
        (6, 5): P1_MAN, (5, 5): P2_MAN,
    })
    move_set = generate_move_set(b, 1)
    assert move_set.max_capture == 1
    assert sorted(move_set.mandatory) == [(6, 1), (6, 5)]
    assert sorted(m.frm for m in move_set) == [(6, 1), (6, 5)]


def test_king_long_range_capture_lands_right_behind():
    b = make_board({(7, 0): P1_KING, (3, 0): P2_MAN})
    moves = generate_legal_moves(b, 1)
    assert [(m.frm, m.to, m.captures) for m in moves] == [((7, 0), (2, 0), [(3, 0)])]


def test_king_capture_needs_empty_landing():
    b = make_board({(7, 0): P1_KING, (3, 0): P2_MAN, (2, 0): P2_MAN})
    assert generate_move_set(b, 1).max_capture == 0


def test_captured_piece_cannot_be_jumped_twice():
    # the king could bounce back over (3, 3) if captures were removed mid-chain
    b = make_board({(3, 0): P1_KING, (3, 3): P2_MAN, (1, 4): P2_MAN, (5, 4): P2_KING})
    moves = find_captures(b, (3, 0))
    assert moves
    assert_capture_legality(moves)
    assert all(m.captures[0] == (3, 3) for m in moves)


def test_capture_chains_are_legal_on_crowded_board():
    b = make_board({
        (4, 4): P1_KING,
        (4, 2): P2_MAN, (2, 4): P2_MAN, (4, 6): P2_MAN, (6, 4): P2_MAN,
        (2, 2): P2_KING, (6, 6): P2_MAN, (1, 6): P2_MAN,
        (7, 0): P1_MAN,
    })
    move_set = generate_move_set(b, 1)
    assert move_set.max_capture >= 2
    assert all(len(m) == move_set.max_capture for m in move_set)
    assert_capture_legality(move_set.moves)


def test_apply_move_runs_whole_chain():
    b = make_board({(6, 1): P1_MAN, (5, 1): P2_MAN, (3, 1): P2_MAN})
    m = generate_legal_moves(b, 1)[0]
    nb = apply_move(b, m)
    assert nb.get_piece((2, 1)) == P1_MAN
    assert nb.get_piece((6, 1)) == EMPTY
    assert nb.count_pieces(2) == 0


def test_determine_winner():
    assert determine_winner(Board.setup_start(), 1) is None
    assert determine_winner(make_board({(5, 1): P1_MAN}), 2) == 1
    # player 1 cannot move: every jump over the blockers lands on an occupied square
    blocked = make_board({(0, 0): P1_KING, (0, 1): P2_MAN, (1, 0): P2_MAN, (1, 1): P2_MAN,
                          (0, 2): P2_MAN, (2, 0): P2_MAN})
    assert determine_winner(blocked, 1) == 2
