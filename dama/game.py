"""Game session: owns the board between turns and applies the moves of both sides."""
from typing import Any, Dict, List, Optional

from dama.engine.board import Board
from dama.engine.move import Move, Pos
from dama.engine.piece import PLAYER_1, PLAYER_2, opponent, owner_of
from dama.engine.rules import MoveSet, apply_move, count_pieces, determine_winner, generate_move_set

MODES = ('pvp', 'pvc')


class IllegalMoveError(ValueError):
    pass


class GameOverError(RuntimeError):
    pass


def paths_through(moves: List[Move], pos: Pos) -> List[Move]:
    """Moves that land on or capture `pos` before their final square."""
    return [m for m in moves
            if pos in m.captures or any(step.to == pos for step in m.sequence[:-1])]


class Game:
    """State of one game.

    mode: 'pvp' for two local players, 'pvc' against the computer
    computer_player: side played by the computer in 'pvc' mode
    """

    def __init__(self, mode: str = 'pvp', computer_player: int = PLAYER_2, board: Optional[Board] = None,
                 current_player: int = PLAYER_1):
        if mode not in MODES:
            raise ValueError(f"Unknown mode {mode!r}, expected one of {MODES}")
        self.mode = mode
        self.computer_player = computer_player
        self.reset(board, current_player)

    def reset(self, board: Optional[Board] = None, current_player: int = PLAYER_1) -> None:
        self.board = board or Board.setup_start()
        self.current_player = current_player
        self.history: List[Move] = []
        self.winner: Optional[int] = None
        self._move_set: Optional[MoveSet] = None
        self._check_game_over()

    @property
    def game_over(self) -> bool:
        return self.winner is not None

    @property
    def is_computer_turn(self) -> bool:
        return self.mode == 'pvc' and not self.game_over and self.current_player == self.computer_player

    def pieces_count(self, player: int) -> int:
        return count_pieces(self.board, player)

    def move_set(self) -> MoveSet:
        if self._move_set is None:
            self._move_set = generate_move_set(self.board, self.current_player)
        return self._move_set

    def is_selectable(self, pos: Pos) -> bool:
        """True if the current player may pick up the piece on `pos`."""
        if self.game_over or owner_of(self.board.get_piece(pos)) != self.current_player:
            return False
        return bool(self.move_set().moves_from(pos))

    def legal_moves_from(self, pos: Pos) -> List[Move]:
        return self.move_set().moves_from(pos)

    def play(self, move: Move) -> None:
        if self.game_over:
            raise GameOverError("The game is over")
        if move not in self.move_set().moves:
            raise IllegalMoveError(f"{move!r} is not legal for player {self.current_player}")
        self.board = apply_move(self.board, move)
        self.history.append(move)
        self.current_player = opponent(self.current_player)
        self._move_set = None
        self._check_game_over()

    def play_intent(self, frm: Pos, to: Pos) -> Move:
        """Play the legal move from `frm` that ends on `to`, as sent by a remote player."""
        candidates = [m for m in self.legal_moves_from(frm) if m.to == to]
        if not candidates:
            raise IllegalMoveError(f"No legal move from {frm} to {to}")
        if len(candidates) > 1:
            raise IllegalMoveError(f"Ambiguous move from {frm} to {to}: {len(candidates)} capture paths")
        self.play(candidates[0])
        return candidates[0]

    def _check_game_over(self) -> None:
        self.winner = determine_winner(self.board, self.current_player)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'board': self.board.to_rows(),
            'currentPlayer': self.current_player,
            'player1PiecesCount': self.pieces_count(PLAYER_1),
            'player2PiecesCount': self.pieces_count(PLAYER_2),
            'gameOver': self.game_over,
            'winner': self.winner,
        }
