from __future__ import annotations

import argparse
import logging

import uvicorn

from core.settings import GameSettings


def parse_args(settings: GameSettings) -> argparse.Namespace:
	parser = argparse.ArgumentParser(description="Run the checkers rule engine HTTP API.")
	parser.add_argument("--host", default=settings.host, help="Bind host for the API server.")
	parser.add_argument("--port", type=int, default=settings.port, help="Port for the API server.")
	parser.add_argument("--reload", action="store_true", help="Enable autoreload (development only).")
	parser.add_argument("--log-level", default=settings.log_level, help="Log level for the engine and uvicorn.")
	return parser.parse_args()


def main() -> None:
	settings = GameSettings()
	args = parse_args(settings)
	logging.basicConfig(
		level=args.log_level.upper(),
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)
	uvicorn.run(
		"server.app:create_app",
		factory=True,
		host=args.host,
		port=args.port,
		reload=args.reload,
		log_level=args.log_level.lower(),
	)


if __name__ == "__main__":
	main()
