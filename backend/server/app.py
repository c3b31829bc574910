from __future__ import annotations

from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from core.actions import ErrorKind
from core.settings import GameSettings

from .schemas import ActionRequest, ResetRequest
from .session import ActionRejected, GameSession


def create_app(settings: Optional[GameSettings] = None) -> FastAPI:
    app = FastAPI(title="Checkers Rule Engine", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    session = GameSession(settings)

    def get_session() -> GameSession:
        return session

    @app.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/board")
    def read_board(session: GameSession = Depends(get_session)):
        return session.serialize()

    @app.get("/legal-moves")
    def read_legal_moves(
        position: int = Query(..., ge=1, le=32),
        session: GameSession = Depends(get_session),
    ):
        try:
            return session.get_legal_destinations(position)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.post("/action")
    def submit_action(payload: ActionRequest, session: GameSession = Depends(get_session)):
        try:
            return session.submit(payload)
        except ActionRejected as exc:
            rejection = exc.rejection
            status = 409 if rejection.kind is ErrorKind.GAME_ALREADY_OVER else 400
            raise HTTPException(
                status_code=status,
                detail={"kind": rejection.kind.value, "message": rejection.message},
            ) from exc

    @app.post("/reset")
    def reset_game(payload: Optional[ResetRequest] = None, session: GameSession = Depends(get_session)):
        return session.reset(payload)

    return app
