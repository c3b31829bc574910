from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class ActionRequest(BaseModel):
    position: int = Field(..., ge=1, le=32, description="Square the player acted on.")


class ResetRequest(BaseModel):
    firstColor: Optional[Literal["red", "black"]] = None
