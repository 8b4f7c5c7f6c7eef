"""Minimax search with alpha-beta pruning for the computer opponent."""
import logging
import threading
from collections import OrderedDict
from typing import List, Optional, Tuple

from dama.engine.board import Board
from dama.engine.evaluation import WIN_SCORE, evaluate
from dama.engine.move import Move
from dama.engine.piece import is_king, opponent, owner_of
from dama.engine.rules import MoveSet, apply_move, generate_legal_moves, generate_move_set

logger = logging.getLogger(__name__)

INF = float('inf')

DEFAULT_DEPTH = 5
DEFAULT_CACHE_SIZE = 1000

CacheKey = Tuple[str, int, int]


def quick_move_score(board: Board, move: Move) -> int:
    """Cheap ordering heuristic: captures, long chains, promotions, central landings."""
    score = 0
    first = move.sequence[0]
    if first.captured is not None:
        score += 150 if is_king(board.get_piece(first.captured)) else 100
        if len(move) > 1:
            score += 50 * (len(move) - 1)
    piece = board.get_piece(move.frm)
    if not is_king(piece):
        far_rank = 0 if owner_of(piece) == 1 else Board.SIZE - 1
        if first.to[0] == far_rank:
            score += 250
    if 1 < first.to[1] < 6:
        score += 20
    return score


class SearchEngine:
    """Fixed-depth minimax with alpha-beta pruning.

    Best moves of root searches are kept in a bounded cache keyed by
    (board fingerprint, player, depth). The oldest entry is dropped first
    once the cache is full; lookups do not refresh an entry.
    Only the root result is cached, inner nodes are always searched.
    """

    def __init__(self, depth: int = DEFAULT_DEPTH, cache_size: int = DEFAULT_CACHE_SIZE):
        self.depth = depth
        self.cache_size = cache_size
        self._cache: 'OrderedDict[CacheKey, Move]' = OrderedDict()
        self._lock = threading.Lock()
        self.nodes = 0
        self.cache_hits = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def order_moves(self, board: Board, moves: List[Move], descending: bool) -> List[Move]:
        # sorted() is stable: equal scores keep generation order
        return sorted(moves, key=lambda m: quick_move_score(board, m), reverse=descending)

    def select_best_move(self, board: Board, player: int, move_set: Optional[MoveSet] = None,
                         depth: Optional[int] = None) -> Optional[Move]:
        """Return the best move for `player`, or None if it has no legal move."""
        depth = self.depth if depth is None else depth
        key = (board.fingerprint(), player, depth)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            self.cache_hits += 1
            logger.debug("cache hit for player %d at depth %d", player, depth)
            return cached

        if move_set is None:
            move_set = generate_move_set(board, player)
        if not move_set:
            return None

        self.nodes = 0
        best_move, best_score = self._search_root(board, player, move_set.moves, depth)
        logger.debug("player %d depth %d: best %r score %s after %d nodes",
                     player, depth, best_move, best_score, self.nodes)

        with self._lock:
            self._cache[key] = best_move
            while len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)
        return best_move

    def _search_root(self, board: Board, player: int, moves: List[Move],
                     depth: int) -> Tuple[Optional[Move], float]:
        best_score = -INF
        best_move = None
        alpha = -INF
        for move in self.order_moves(board, moves, descending=True):
            score = self.minimax(apply_move(board, move), depth - 1, alpha, INF, False, player)
            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, best_score)
        return best_move, best_score

    def minimax(self, board: Board, depth: int, alpha: float, beta: float,
                maximizing: bool, player: int) -> float:
        """Score `board` for `player`, searching `depth` more plies.

        `maximizing` tells whether `player` is the side to move here.
        """
        self.nodes += 1
        if depth <= 0:
            return evaluate(board, player)

        mover = player if maximizing else opponent(player)
        moves = generate_legal_moves(board, mover)
        if not moves:
            # no move means the mover has lost
            return -WIN_SCORE if maximizing else WIN_SCORE

        if depth > 2:
            moves = self.order_moves(board, moves, descending=maximizing)

        best = -INF if maximizing else INF
        for move in moves:
            score = self.minimax(apply_move(board, move), depth - 1, alpha, beta, not maximizing, player)
            if maximizing:
                best = max(best, score)
                alpha = max(alpha, best)
            else:
                best = min(best, score)
                beta = min(beta, best)
            if beta <= alpha:
                break
        return best
