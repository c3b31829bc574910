from __future__ import annotations

import logging
from typing import Optional

import pygame
from pygame import gfxdraw

from core.game import Game
from core.geometry import BOTTOM_ROW, Position, cell_of, position_at
from core.pieces import Color, Piece

logger = logging.getLogger(__name__)


def position_from_pixel(
    pos: tuple[int, int], *, margin: int, square_size: int
) -> Optional[Position]:
    """Translate a window pixel into a playable square, if it lies on one."""
    x, y = pos
    x -= margin
    y -= margin
    board_pixels = square_size * BOTTOM_ROW
    if x < 0 or y < 0 or x >= board_pixels or y >= board_pixels:
        return None
    return position_at(y // square_size, x // square_size)


class CheckersGUI:
    """Draws the engine's board snapshot and feeds clicks back as positions."""

    def __init__(self, game: Game, square_size: int = 80, info_height: int = 240) -> None:
        self.game = game
        self.square_size = square_size
        self.board_pixels = self.square_size * BOTTOM_ROW
        self.info_height = info_height

        self.margin = 40
        self.window_width = self.board_pixels + self.margin * 2
        self.window_height = self.board_pixels + self.info_height + self.margin * 2

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Checkers")

        self.font = pygame.font.SysFont("arial", 22)
        self.small_font = pygame.font.SysFont("arial", 16)
        self.number_font = pygame.font.SysFont("arial", 12)
        self.king_font = pygame.font.SysFont("arial", 22, bold=True)
        self.clock = pygame.time.Clock()

        self.hover: Optional[Position] = None
        self.piece_surfaces: dict[tuple[Color, bool], pygame.Surface] = {}

        self.colors = {
            "light": (233, 210, 173),
            "dark": (145, 104, 66),
            "highlight": (246, 227, 90),
            "selected": (252, 142, 80),
            "red_piece": (190, 40, 40),
            "black_piece": (35, 35, 35),
            "outline": (25, 25, 25),
            "background": (30, 34, 45),
            "info_bg": (40, 46, 60),
            "panel_border": (86, 94, 110),
            "text": (230, 230, 230),
            "warning": (255, 170, 120),
            "board_frame": (82, 54, 29),
            "king": (255, 215, 0),
        }

    def run(self) -> None:
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key in (pygame.K_ESCAPE, pygame.K_q):
                        running = False
                    elif event.key == pygame.K_r:
                        self.game.reset()
                elif event.type == pygame.MOUSEMOTION:
                    self.hover = self._position_from_pixel(event.pos)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self._handle_click(event.pos)

            self._draw()
            pygame.display.flip()
            self.clock.tick(60)

    def _handle_click(self, pixel: tuple[int, int]) -> None:
        position = self._position_from_pixel(pixel)
        if position is None:
            return
        result = self.game.submit_action(position)
        logger.debug("Click on %d -> %r", position, result)

    def _position_from_pixel(self, pixel: tuple[int, int]) -> Optional[Position]:
        return position_from_pixel(pixel, margin=self.margin, square_size=self.square_size)

    def _draw(self) -> None:
        board = self.game.current_board()
        state = self.game.current_turn_state()

        self.screen.fill(self.colors["background"])
        self._draw_board()
        self._draw_selection(state.selected)
        for pos, piece in board.getAllPieces():
            self._draw_piece(pos, piece)
        self._draw_info_panel(state.message, board.count(Color.RED), board.count(Color.BLACK))

    def _draw_board(self) -> None:
        board_rect = pygame.Rect(self.margin, self.margin, self.board_pixels, self.board_pixels)
        frame_rect = board_rect.inflate(20, 20)
        pygame.draw.rect(self.screen, self.colors["board_frame"], frame_rect, border_radius=20)

        for row in range(BOTTOM_ROW):
            for col in range(BOTTOM_ROW):
                playable = position_at(row, col)
                color = self.colors["dark"] if playable else self.colors["light"]
                rect = self._rect_for_cell(row, col)
                pygame.draw.rect(self.screen, color, rect)
                if playable:
                    label = self.number_font.render(str(playable), True, self.colors["light"])
                    self.screen.blit(label, (rect.left + 4, rect.top + 2))

    def _draw_selection(self, selected: Optional[Position]) -> None:
        if selected is not None:
            rect = self._rect_for_cell(*cell_of(selected))
            pygame.draw.rect(self.screen, self.colors["selected"], rect, 4, border_radius=8)

        destinations = self.game.selected_destinations()
        for dest in sorted(set(destinations.simple) | set(destinations.captures)):
            cx, cy = self._rect_for_cell(*cell_of(dest)).center
            radius = 16 if dest == self.hover else 12
            gfxdraw.filled_circle(self.screen, cx, cy, radius, (*self.colors["highlight"], 140))
            gfxdraw.aacircle(self.screen, cx, cy, radius, self.colors["outline"])

    def _draw_piece(self, pos: Position, piece: Piece) -> None:
        surface = self._get_piece_surface(piece)
        rect = surface.get_rect(center=self._rect_for_cell(*cell_of(pos)).center)
        self.screen.blit(surface, rect)

    def _draw_info_panel(self, message: str, red_count: int, black_count: int) -> None:
        panel_top = self.margin + self.board_pixels + 30
        info_rect = pygame.Rect(self.margin, panel_top, self.board_pixels, self.info_height - 20)
        pygame.draw.rect(self.screen, self.colors["info_bg"], info_rect, border_radius=16)
        pygame.draw.rect(self.screen, self.colors["panel_border"], info_rect, 2, border_radius=16)

        lines = [
            (self.font, self.game.status_text(), self.colors["text"]),
            (self.small_font, f"Pieces  Black: {black_count}    Red: {red_count}", self.colors["text"]),
            (self.small_font, f"Wins  {self.game.wins_text()}", self.colors["text"]),
            (self.small_font, message, self.colors["warning"]),
        ]
        lines += [(self.small_font, text, self.colors["text"]) for text in self.game.rules_text()]
        lines.append(
            (self.small_font, "Click a piece, then its destination.  R: Reset  |  Esc/Q: Quit", self.colors["text"])
        )
        y_offset = info_rect.top + 14
        for font, text, color in lines:
            if text:
                self.screen.blit(font.render(text, True, color), (info_rect.left + 20, y_offset))
            y_offset += 28

    def _rect_for_cell(self, row: int, col: int) -> pygame.Rect:
        return pygame.Rect(
            self.margin + col * self.square_size,
            self.margin + row * self.square_size,
            self.square_size,
            self.square_size,
        )

    def _get_piece_surface(self, piece: Piece) -> pygame.Surface:
        key = (piece.color, piece.is_king)
        if key in self.piece_surfaces:
            return self.piece_surfaces[key]

        diameter = self.square_size - 14
        radius = diameter // 2
        surface = pygame.Surface((diameter, diameter), pygame.SRCALPHA)
        cx, cy = surface.get_width() // 2, surface.get_height() // 2

        base = self.colors["red_piece"] if piece.color is Color.RED else self.colors["black_piece"]
        pygame.draw.circle(surface, base, (cx, cy), radius)
        pygame.draw.circle(surface, self.colors["outline"], (cx, cy), radius, 2)

        if piece.is_king:
            crown = self.king_font.render("K", True, self.colors["king"])
            surface.blit(crown, crown.get_rect(center=(cx, cy)))

        self.piece_surfaces[key] = surface
        return surface
