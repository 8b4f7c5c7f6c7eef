# Computer opponent: runs one search per turn and hands the move to the game.
from typing import Callable, Optional
import logging
import random
import threading
import time

from dama.engine.board import Board
from dama.engine.move import Move
from dama.engine.rules import generate_legal_moves, generate_move_set
from dama.engine.search import SearchEngine

logger = logging.getLogger(__name__)


def choose_random_move(board: Board, player: int) -> Optional[Move]:
    """Return a randomly chosen legal Move for player, or None if no legal moves."""
    moves = generate_legal_moves(board, player)
    if not moves:
        return None
    return random.choice(moves)


class ComputerOpponent:
    """Plays one side of a game through a SearchEngine.

    At most one search runs at a time: a trigger that arrives while the
    previous one is still thinking is ignored.
    """

    def __init__(self, engine: Optional[SearchEngine] = None, player: int = 2,
                 depth: Optional[int] = None, move_delay: float = 0.0):
        self.engine = engine or SearchEngine()
        self.player = player
        self.depth = depth
        self.move_delay = move_delay
        self._busy = threading.Lock()

    @property
    def thinking(self) -> bool:
        return self._busy.locked()

    def choose_move(self, board: Board) -> Optional[Move]:
        """Return the move to play on `board`, None if there is none."""
        move_set = generate_move_set(board, self.player)
        if not move_set:
            return None
        move = self.engine.select_best_move(board, self.player, move_set, self.depth)
        if move is None:
            logger.error("search returned no move with %d legal moves available; playing at random",
                         len(move_set))
            move = choose_random_move(board, self.player)
        return move

    def play_turn(self, board: Board, apply: Callable[[Move], None]) -> bool:
        """Search and pass the chosen move to `apply`.

        Returns False when a search is already in flight or there is no move.
        """
        if not self._busy.acquire(blocking=False):
            logger.debug("search already running, ignoring trigger")
            return False
        try:
            if self.move_delay:
                time.sleep(self.move_delay)
            move = self.choose_move(board)
            if move is None:
                return False
            if self.move_delay:
                time.sleep(self.move_delay)
            apply(move)
            return True
        finally:
            self._busy.release()
