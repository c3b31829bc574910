from __future__ import annotations

import importlib.util
import sys
import threading
import unittest
from pathlib import Path
from unittest import mock


BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))


from fastapi.testclient import TestClient  # noqa: E402

from core.actions import ErrorKind  # noqa: E402
from core.board import Board  # noqa: E402
from core.game import Game  # noqa: E402
from core.pieces import Color, Man  # noqa: E402
from core.settings import GameSettings  # noqa: E402
from server.app import create_app  # noqa: E402
from server.schemas import ActionRequest, ResetRequest  # noqa: E402
from server.session import ActionRejected, GameSession  # noqa: E402


def _settings() -> GameSettings:
    return GameSettings(_env_file=None)


class GameSessionTests(unittest.TestCase):
    def test_select_and_move(self) -> None:
        session = GameSession(_settings())
        selected = session.submit(ActionRequest(position=9))
        self.assertEqual(selected["result"], {"type": "selected", "position": 9})
        self.assertEqual(selected["state"]["phase"], "piece_selected")

        moved = session.submit(ActionRequest(position=13))
        self.assertEqual(moved["result"]["type"], "turn_ended")
        self.assertEqual(moved["result"]["nextColor"], "red")
        self.assertEqual(moved["result"]["move"]["from"], 9)
        self.assertEqual(moved["board"]["squares"]["13"], {"color": "black", "isKing": False})
        self.assertIsNone(moved["board"]["squares"]["9"])
        self.assertEqual(moved["state"]["turn"], "red")

    def test_rejection_raises_with_kind(self) -> None:
        session = GameSession(_settings())
        with self.assertRaises(ActionRejected) as ctx:
            session.submit(ActionRequest(position=22))
        self.assertIs(ctx.exception.rejection.kind, ErrorKind.INVALID_PIECE_COLOR)

    def test_legal_destinations_query(self) -> None:
        session = GameSession(_settings())
        payload = session.get_legal_destinations(9)
        self.assertEqual(payload, {"position": 9, "simple": [13, 14], "captures": []})
        with self.assertRaises(ValueError):
            session.get_legal_destinations(22)
        with self.assertRaises(ValueError):
            session.get_legal_destinations(16)

    def test_legal_destinations_follow_mandatory_capture(self) -> None:
        session = GameSession(_settings())
        layout = {22: Man(Color.RED), 18: Man(Color.BLACK), 25: Man(Color.RED), 1: Man(Color.BLACK)}
        session.game = Game(_settings(), board=Board.from_layout(layout), first_color=Color.RED)

        with self.assertRaises(ValueError):
            session.get_legal_destinations(25)
        self.assertEqual(
            session.get_legal_destinations(22),
            {"position": 22, "simple": [], "captures": [{"landing": 15, "captured": 18}]},
        )
        self.assertEqual(session.game.current_turn_state().message, "")

    def test_legal_destinations_follow_the_jump_pin(self) -> None:
        session = GameSession(_settings())
        layout = {
            1: Man(Color.BLACK),
            3: Man(Color.BLACK),
            6: Man(Color.RED),
            15: Man(Color.RED),
            32: Man(Color.RED),
        }
        session.game = Game(_settings(), board=Board.from_layout(layout), first_color=Color.BLACK)
        session.submit(ActionRequest(position=1))
        session.submit(ActionRequest(position=10))

        with self.assertRaises(ValueError):
            session.get_legal_destinations(3)
        self.assertEqual(
            session.get_legal_destinations(10),
            {"position": 10, "simple": [], "captures": [{"landing": 19, "captured": 15}]},
        )

    def test_reset_can_change_first_color(self) -> None:
        session = GameSession(_settings())
        session.submit(ActionRequest(position=9))
        payload = session.reset(ResetRequest(firstColor="red"))
        self.assertEqual(payload["state"]["turn"], "red")
        self.assertIsNone(payload["state"]["selected"])

    def test_concurrent_submissions_are_serialised(self) -> None:
        session = GameSession(_settings())
        results: list[str] = []

        def _click() -> None:
            try:
                results.append(session.submit(ActionRequest(position=10))["result"]["type"])
            except ActionRejected:
                results.append("rejected")

        threads = [threading.Thread(target=_click) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        # Clicks alternate between selecting and deselecting the same piece.
        self.assertEqual(sorted(results), ["deselected", "deselected", "selected", "selected"])
        self.assertIsNone(session.game.current_turn_state().selected)


class AppTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app(_settings()))

    def test_health(self) -> None:
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})

    def test_board_snapshot(self) -> None:
        body = self.client.get("/board").json()
        self.assertEqual(len(body["board"]["squares"]), 32)
        self.assertEqual(body["state"]["turn"], "black")
        self.assertEqual(body["status"], "Black to move.")
        self.assertEqual(len(body["legalMoves"]), 7)
        self.assertEqual(body["wins"], {"black": 0, "red": 0, "ties": 0})

    def test_action_flow_and_rejections(self) -> None:
        rejected = self.client.post("/action", json={"position": 22})
        self.assertEqual(rejected.status_code, 400)
        self.assertEqual(rejected.json()["detail"]["kind"], "invalid_piece_color")

        self.assertEqual(self.client.post("/action", json={"position": 9}).status_code, 200)
        response = self.client.post("/action", json={"position": 14})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["result"]["type"], "turn_ended")

    def test_off_board_position_fails_validation(self) -> None:
        self.assertEqual(self.client.post("/action", json={"position": 40}).status_code, 422)
        self.assertEqual(self.client.get("/legal-moves", params={"position": 0}).status_code, 422)

    def test_legal_moves_endpoint(self) -> None:
        response = self.client.get("/legal-moves", params={"position": 12})
        self.assertEqual(response.json(), {"position": 12, "simple": [16], "captures": []})
        self.assertEqual(self.client.get("/legal-moves", params={"position": 21}).status_code, 400)

    def test_reset(self) -> None:
        self.client.post("/action", json={"position": 9})
        body = self.client.post("/reset").json()
        self.assertIsNone(body["state"]["selected"])


class LauncherTests(unittest.TestCase):
    def _load_launcher(self):
        spec = importlib.util.spec_from_file_location("api_launcher", BACKEND_DIR / "main.py")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    def test_launcher_is_tab_indented(self) -> None:
        source = (BACKEND_DIR / "main.py").read_text()
        indented = [line for line in source.splitlines() if line[:1] in (" ", "\t")]
        self.assertTrue(indented)
        self.assertTrue(all(line.startswith("\t") for line in indented))

    def test_flags_default_to_settings(self) -> None:
        launcher = self._load_launcher()
        with mock.patch.object(sys, "argv", ["main.py", "--port", "9001"]):
            args = launcher.parse_args(_settings())
        self.assertEqual(args.port, 9001)
        self.assertEqual(args.host, "0.0.0.0")
        self.assertEqual(args.log_level, "INFO")
        self.assertFalse(args.reload)


if __name__ == "__main__":
    unittest.main()
