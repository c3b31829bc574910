from __future__ import annotations

import logging
import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parent / "backend"
if str(BACKEND_DIR) not in sys.path:
	sys.path.insert(0, str(BACKEND_DIR))

import pygame  # noqa: E402

from core.game import Game  # noqa: E402
from core.settings import GameSettings  # noqa: E402
from ui.pygame_gui import CheckersGUI  # noqa: E402


def main() -> None:
	settings = GameSettings()
	logging.basicConfig(level=settings.log_level.upper())
	pygame.init()
	try:
		game = Game(settings)
		gui = CheckersGUI(game)
		gui.run()
	finally:
		pygame.quit()


if __name__ == "__main__":
	main()
