from typing import List, Optional
import threading

import pygame

from dama.ai import ComputerOpponent
from dama.config import UIConfig
from dama.engine.board import Board
from dama.engine.move import Move, Pos
from dama.engine.piece import PLAYER_1, PLAYER_2, is_king, owner_of
from dama.game import Game, GameOverError, IllegalMoveError, paths_through


class PygameUI:
    """Pygame UI with animated moves and a sidebar.

    Buttons in sidebar:
      - Reset: start a new game
      - Mode: switch between two local players and playing the computer
    The computer thinks on a worker thread so the window keeps redrawing.
    """

    def __init__(self, game: Game, opponent: Optional[ComputerOpponent] = None, config: Optional[UIConfig] = None):
        self.game = game
        self.config = config or UIConfig()
        self.opponent = opponent or ComputerOpponent(player=game.computer_player, move_delay=self.config.move_delay)
        self.square_size = self.config.square_size
        self.margin = self.config.margin
        self.sidebar_width = self.config.sidebar_width
        self.anim_seconds = self.config.anim_seconds

        # Interaction state
        self.selected: Optional[Pos] = None
        self.legal_moves: List[Move] = []
        # capture paths that end on the same clicked square, awaiting a choice
        self.path_choices: List[Move] = []
        self.status = ""

        # Animation state: one step of the move at a time
        self.animating = False
        self.anim_move: Optional[Move] = None
        self.anim_step = 0
        self.anim_elapsed = 0.0
        self.anim_board: Optional[Board] = None

        # computer move handed over by the worker thread
        self._pending_move: Optional[Move] = None
        self._pending_lock = threading.Lock()
        self._worker: Optional[threading.Thread] = None
        self._sidebar_buttons = None

    def _mouse_to_board(self, mouse_pos: tuple) -> Optional[Pos]:
        mx, my = mouse_pos
        rel_x = mx - self.margin
        rel_y = my - self.margin
        if rel_x < 0 or rel_y < 0:
            return None
        col = rel_x // self.square_size
        row = rel_y // self.square_size
        if 0 <= row < Board.SIZE and 0 <= col < Board.SIZE:
            return (int(row), int(col))
        return None

    def _square_center(self, pos: Pos) -> tuple:
        return (self.margin + pos[1] * self.square_size + self.square_size // 2,
                self.margin + pos[0] * self.square_size + self.square_size // 2)

    def _player_label(self, player: int) -> str:
        if self.game.mode == 'pvc' and player == self.game.computer_player:
            return f"Player {player} (computer)"
        return f"Player {player}"

    def _update_status(self) -> None:
        if self.game.game_over:
            self.status = f"{self._player_label(self.game.winner)} wins!"
        elif self.game.move_set().max_capture:
            self.status = f"{self._player_label(self.game.current_player)}: capture is mandatory"
        else:
            self.status = f"{self._player_label(self.game.current_player)} to move"

    def handle_board_click(self, pos: Pos) -> None:
        if self.animating or self.game.game_over or self.game.is_computer_turn:
            return
        if self.path_choices:
            remaining = paths_through(self.path_choices, pos)
            if len(remaining) == 1:
                self._start_move_animation(remaining[0])
                return
            if remaining:
                self.path_choices = remaining
                self.legal_moves = remaining
                return
            # a click off every candidate path drops back to the full selection
            self.path_choices = []
            self.legal_moves = self.game.legal_moves_from(self.selected)
            self._update_status()
        if self.selected is not None:
            targets = [m for m in self.legal_moves if m.to == pos]
            if len(targets) > 1:
                self.path_choices = targets
                self.legal_moves = targets
                self.status = "Several captures end here: click a square on the path to take"
                return
            if targets:
                self._start_move_animation(targets[0])
                return
        if pos == self.selected:
            self.selected = None
            self.legal_moves = []
            self.path_choices = []
        elif self.game.is_selectable(pos):
            self.selected = pos
            self.legal_moves = self.game.legal_moves_from(pos)
        else:
            self.selected = None
            self.legal_moves = []
            self.path_choices = []
            if owner_of(self.game.board.get_piece(pos)) == self.game.current_player and self.game.move_set().mandatory:
                self.status = "Capture is mandatory"

    def _start_move_animation(self, move: Move) -> None:
        """The game is updated only once the last step has been drawn."""
        if self.animating:
            return
        self.animating = True
        self.anim_move = move
        self.anim_step = 0
        self.anim_elapsed = 0.0
        self.anim_board = self.game.board
        self.selected = None
        self.legal_moves = []
        self.path_choices = []

    def _advance_animation(self, dt: float) -> None:
        if not self.animating or self.anim_move is None:
            return
        self.anim_elapsed += dt
        if self.anim_elapsed < self.anim_seconds:
            return
        frm = self.anim_move.frm if self.anim_step == 0 else self.anim_move.sequence[self.anim_step - 1].to
        self.anim_board = self.anim_board.apply_step(frm, self.anim_move.sequence[self.anim_step])
        self.anim_step += 1
        self.anim_elapsed = 0.0
        if self.anim_step >= len(self.anim_move):
            self._finish_move_animation()

    def _finish_move_animation(self) -> None:
        move = self.anim_move
        self.animating = False
        self.anim_move = None
        self.anim_board = None
        try:
            self.game.play(move)
        except (IllegalMoveError, GameOverError) as e:
            print("Error applying move after animation:", e)
        self._update_status()

    def _hand_over(self, move: Move) -> None:
        with self._pending_lock:
            self._pending_move = move

    def _maybe_start_computer(self) -> None:
        if self.animating or not self.game.is_computer_turn or self.opponent.thinking:
            return
        if self._worker is not None and self._worker.is_alive():
            return
        board = self.game.board

        def _think():
            try:
                self.opponent.play_turn(board, self._hand_over)
            except Exception as e:
                print("Computer move error:", e)

        self.status = f"{self._player_label(self.game.current_player)} is thinking..."
        self._worker = threading.Thread(target=_think, daemon=True)
        self._worker.start()

    def _take_pending_move(self) -> None:
        with self._pending_lock:
            move, self._pending_move = self._pending_move, None
        if move is not None:
            self._start_move_animation(move)

    def _do_reset(self) -> None:
        if self.opponent.thinking:
            return
        with self._pending_lock:
            self._pending_move = None
        self.game.reset()
        self.selected = None
        self.legal_moves = []
        self.path_choices = []
        self.animating = False
        self.anim_move = None
        self._update_status()

    def _toggle_mode(self) -> None:
        if self.opponent.thinking or self.animating:
            return
        self.game.mode = 'pvp' if self.game.mode == 'pvc' else 'pvc'
        self._update_status()

    def run(self) -> None:
        try:
            pygame.init()
        except Exception as e:
            raise RuntimeError("Failed to initialize pygame") from e

        board_px = self.margin * 2 + self.square_size * Board.SIZE
        total_width = board_px + self.sidebar_width
        total_height = board_px

        screen = pygame.display.set_mode((total_width, total_height))
        pygame.display.set_caption("Dama")
        clock = pygame.time.Clock()
        font = pygame.font.SysFont(None, 20)
        large_font = pygame.font.SysFont(None, 26)
        self._update_status()

        running = True
        while running:
            dt = clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_q):
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    mx, my = event.pos
                    if mx >= board_px:
                        self._handle_sidebar_click(mx - board_px, my)
                        continue
                    board_pos = self._mouse_to_board(event.pos)
                    if board_pos is not None:
                        self.handle_board_click(board_pos)

            self._take_pending_move()
            self._maybe_start_computer()
            self._advance_animation(dt)

            screen.fill((40, 40, 40))
            board_surface = screen.subsurface((0, 0, board_px, total_height))
            self._draw_board(board_surface)
            self._draw_highlights(board_surface)
            self._draw_pieces(board_surface, self.anim_board if self.animating else self.game.board)

            sidebar_rect = pygame.Rect(board_px, 0, self.sidebar_width, total_height)
            pygame.draw.rect(screen, (60, 60, 60), sidebar_rect)
            self._draw_sidebar(screen, sidebar_rect, font, large_font)

            pygame.display.flip()

        pygame.quit()

    def _draw_board(self, surface: pygame.Surface) -> None:
        light = (240, 217, 181)
        dark = (181, 136, 99)
        for r in range(Board.SIZE):
            for c in range(Board.SIZE):
                x = self.margin + c * self.square_size
                y = self.margin + r * self.square_size
                color = light if (r + c) % 2 == 0 else dark
                pygame.draw.rect(surface, color, (x, y, self.square_size, self.square_size))

    def _draw_pieces(self, surface: pygame.Surface, board: Board) -> None:
        for r in range(Board.SIZE):
            for c in range(Board.SIZE):
                p = board.get_piece((r, c))
                if owner_of(p) == 0:
                    continue
                self._draw_piece_at(surface, self._square_center((r, c)), owner_of(p), king=is_king(p))

    def _draw_piece_at(self, surface: pygame.Surface, center: tuple, player: int, king: bool = False) -> None:
        radius = int(self.square_size * 0.4)
        if player == PLAYER_2:
            border_color = (20, 20, 20)
            fill_color = (40, 40, 40)
        else:
            border_color = (230, 230, 230)
            fill_color = (255, 255, 255)
        pygame.draw.circle(surface, border_color, center, radius)
        pygame.draw.circle(surface, fill_color, center, max(1, radius - 6))
        if king:
            pygame.draw.circle(surface, (212, 175, 55), center, radius // 3)

    def _draw_highlights(self, surface: pygame.Surface) -> None:
        if self.animating or self.game.game_over:
            return
        # forced-capture hint
        for r, c in self.game.move_set().mandatory:
            x = self.margin + c * self.square_size
            y = self.margin + r * self.square_size
            pygame.draw.rect(surface, (200, 40, 40), (x, y, self.square_size, self.square_size), width=3)
        if self.selected is None:
            return
        r, c = self.selected
        x = self.margin + c * self.square_size
        y = self.margin + r * self.square_size
        pygame.draw.rect(surface, (30, 144, 255), (x, y, self.square_size, self.square_size), width=4)
        for m in self.legal_moves:
            points = [self._square_center(m.frm)] + [self._square_center(s.to) for s in m.sequence]
            if len(points) > 2:
                pygame.draw.lines(surface, (34, 139, 34), False, points, 3)
            pygame.draw.circle(surface, (34, 139, 34), points[-1], max(6, self.square_size // 8))

    def _handle_sidebar_click(self, rel_x: int, rel_y: int) -> None:
        """Coordinates are relative to the sidebar origin."""
        btns = self._sidebar_buttons
        if not btns:
            return
        if btns['reset'].collidepoint((rel_x, rel_y)):
            self._do_reset()
        elif btns['mode'].collidepoint((rel_x, rel_y)):
            self._toggle_mode()

    def _draw_sidebar(self, screen: pygame.Surface, rect: pygame.Rect, font: pygame.font.Font,
                      large_font: pygame.font.Font) -> None:
        x0 = rect.x + 8
        y = 8
        screen.blit(large_font.render("Dama", True, (255, 255, 255)), (x0, y))
        y += 32
        screen.blit(font.render(self.status, True, (255, 255, 255)), (x0, y))
        y += 24
        for player in (PLAYER_1, PLAYER_2):
            text = font.render(f"Player {player} pieces: {self.game.pieces_count(player)}", True, (255, 255, 255))
            screen.blit(text, (x0, y))
            y += 20
        y += 8
        if self.game.game_over:
            win_text = large_font.render(f"Winner: Player {self.game.winner}", True, (255, 215, 0))
            screen.blit(win_text, (x0, y))
            y += 32

        btn_w = self.sidebar_width - 16
        btn_h = 28
        reset_rect = pygame.Rect(x0, y, btn_w, btn_h)
        pygame.draw.rect(screen, (100, 80, 80), reset_rect)
        screen.blit(font.render("Reset", True, (255, 255, 255)), (x0 + 8, y + 6))
        y += btn_h + 8
        mode_rect = pygame.Rect(x0, y, btn_w, btn_h)
        pygame.draw.rect(screen, (80, 100, 80), mode_rect)
        label = "Mode: two players" if self.game.mode == 'pvp' else "Mode: vs computer"
        screen.blit(font.render(label, True, (255, 255, 255)), (x0 + 8, y + 6))

        # cache button rects in sidebar-local coordinates for click handling
        self._sidebar_buttons = {
            'reset': reset_rect.move(-rect.x, -rect.y),
            'mode': mode_rect.move(-rect.x, -rect.y),
        }
