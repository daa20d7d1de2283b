"""REST service keeping Belote-Coinchée score sheets."""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from belote.exceptions import BeloteError
from belote.rules_schema import DEFAULT_VICTORY_THRESHOLD, GameConfig
from belote.seating import DEFAULT_TEAM_NAMES
from belote.service import ScoreService, SessionView
from belote.values import reference_table

logger = logging.getLogger(__name__)


class DeclarationPayload(BaseModel):
    contract: str = "0"
    realized: str = "0"
    announcement: str = "N/A"
    remark: str = "N/A"


class RoundRequest(BaseModel):
    team_a: DeclarationPayload = Field(default_factory=DeclarationPayload)
    team_b: DeclarationPayload = Field(default_factory=DeclarationPayload)


class StartRequest(BaseModel):
    team_names: List[str] = Field(default_factory=lambda: list(DEFAULT_TEAM_NAMES))
    victory_threshold: int = DEFAULT_VICTORY_THRESHOLD
    rotate_dealer: bool = True


class ResetRequest(BaseModel):
    victory_threshold: Optional[int] = None


class RenameRequest(BaseModel):
    team: int
    name: str


class LayoutRequest(BaseModel):
    seats: List[str]
    dealer: str


sessions: Dict[str, ScoreService] = {}


app = FastAPI(title="Belote Score Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def ensure_session(session_id: str) -> ScoreService:
    service = sessions.get(session_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return service


def serialize_view(view: SessionView) -> Dict[str, object]:
    return asdict(view)


@app.get("/values")
def values() -> Dict[str, object]:
    return reference_table()


@app.post("/validate")
def validate(request: RoundRequest) -> Dict[str, object]:
    service = ScoreService()
    team_a = request.team_a.model_dump()
    team_b = request.team_b.model_dump()
    result = service.check_round(team_a, team_b)
    return {
        "valid": result.valid,
        "message": result.message,
        "ready": service.is_round_ready(team_a, team_b),
    }


@app.post("/session/start")
def start_session(request: StartRequest) -> Dict[str, object]:
    try:
        config = GameConfig(
            victory_threshold=request.victory_threshold,
            team_names=tuple(request.team_names),
            rotate_dealer=request.rotate_dealer,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    service = ScoreService.from_config(config)
    session_id = uuid.uuid4().hex
    sessions[session_id] = service
    logger.info("Started session %s", session_id)
    return {"session_id": session_id, "state": serialize_view(service.get_session_view())}


@app.get("/session/{session_id}")
def get_session(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"state": serialize_view(service.get_session_view())}


@app.post("/session/{session_id}/rounds")
def add_round(session_id: str, request: RoundRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    try:
        (team_a, team_b), view = service.record_round(request.team_a.model_dump(), request.team_b.model_dump())
    except BeloteError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {
        "state": serialize_view(view),
        "round": {"team_a": team_a.as_row(), "team_b": team_b.as_row()},
        "gameOver": view.winner is not None,
    }


@app.post("/session/{session_id}/undo")
def undo_round(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"state": serialize_view(service.undo_round())}


@app.post("/session/{session_id}/reset")
def reset_session(session_id: str, request: ResetRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    try:
        view = service.restart(victory_threshold=request.victory_threshold)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"state": serialize_view(view)}


@app.post("/session/{session_id}/teams")
def rename_team(session_id: str, request: RenameRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    try:
        view = service.rename_team(request.team, request.name)
    except (BeloteError, IndexError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"state": serialize_view(view)}


@app.post("/session/{session_id}/layout")
def set_layout(session_id: str, request: LayoutRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    try:
        view = service.set_layout(request.seats, request.dealer)
    except BeloteError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"state": serialize_view(view)}


@app.get("/session/{session_id}/statistics")
def statistics(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"statistics": service.get_statistics_payload()}
