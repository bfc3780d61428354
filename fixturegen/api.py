"""
REST API for the fixture generator.
Thin wrappers around the tournament service; one tournament per app instance.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import Depends, FastAPI, HTTPException, Path, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from fixturegen.config import configure_logging, get_settings
from fixturegen.services.tournament_service import (
    NotEnoughParticipantsError,
    TournamentService,
)

settings = get_settings()


# ---------- Lifespan ----------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging(settings.log_level)
    yield


# ---------- FastAPI app ----------
app = FastAPI(
    title="Fixture Generator API",
    description="Round-robin fixtures and gameweeks for poster rendering",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)
app.state.tournament = TournamentService(doubled=settings.default_doubled)


def get_tournament(request: Request) -> TournamentService:
    return request.app.state.tournament


# ---------- Request/Response models ----------


class AddParticipantRequest(BaseModel):
    name: str = Field(..., max_length=200)


class AttachImageRequest(BaseModel):
    image: str | None = Field(None, description="Opaque image reference, e.g. a data URL")


class SettingsRequest(BaseModel):
    doubled: bool = Field(..., description="Home/away mode: every pair meets twice")


class GenerateScheduleRequest(BaseModel):
    doubled: bool | None = Field(None, description="Override home/away mode for this and later generations")


# ---------- Endpoints ----------


@app.get("/health")
def health() -> dict[str, Any]:
    return {"status": "ok"}


@app.get("/participants")
def list_participants(svc: TournamentService = Depends(get_tournament)) -> dict[str, Any]:
    """Participants in insertion order."""
    return {"participants": [p.to_dict() for p in svc.list_participants()]}


@app.post("/participants")
def add_participant(
    req: AddParticipantRequest,
    svc: TournamentService = Depends(get_tournament),
) -> dict[str, Any]:
    """Add a participant. Clears any generated schedule."""
    participant = svc.add_participant(req.name)
    if participant is None:
        raise HTTPException(status_code=400, detail="Participant name must not be blank")
    return participant.to_dict()


@app.get("/participants/{participant_id}")
def get_participant(
    participant_id: str,
    svc: TournamentService = Depends(get_tournament),
) -> dict[str, Any]:
    """One participant, including any attached image."""
    participant = svc.get_participant(participant_id)
    if participant is None:
        raise HTTPException(status_code=404, detail="Participant not found")
    return participant.to_dict()


@app.delete("/participants/{participant_id}")
def remove_participant(
    participant_id: str,
    svc: TournamentService = Depends(get_tournament),
) -> dict[str, Any]:
    """Remove a participant (idempotent). Clears any generated schedule."""
    return {"participant_id": participant_id, "removed": svc.remove_participant(participant_id)}


@app.put("/participants/{participant_id}/image")
def attach_image(
    participant_id: str,
    req: AttachImageRequest,
    svc: TournamentService = Depends(get_tournament),
) -> dict[str, Any]:
    """Attach avatar data to a participant. Does not affect the schedule."""
    participant = svc.attach_image(participant_id, req.image)
    if participant is None:
        raise HTTPException(status_code=404, detail="Participant not found")
    return participant.to_dict()


@app.get("/settings")
def get_schedule_settings(svc: TournamentService = Depends(get_tournament)) -> dict[str, Any]:
    return {"doubled": svc.doubled}


@app.put("/settings")
def update_schedule_settings(
    req: SettingsRequest,
    svc: TournamentService = Depends(get_tournament),
) -> dict[str, Any]:
    """Switch home/away mode. Clears the schedule if the mode changes."""
    svc.set_doubled(req.doubled)
    return {"doubled": svc.doubled}


@app.post("/schedule")
def generate_schedule(
    req: GenerateScheduleRequest | None = None,
    svc: TournamentService = Depends(get_tournament),
) -> dict[str, Any]:
    """Generate the full round-robin schedule from the current participants."""
    try:
        schedule = svc.generate(doubled=req.doubled if req else None, strict=True)
    except NotEnoughParticipantsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return schedule.to_dict()


@app.get("/schedule")
def get_schedule(svc: TournamentService = Depends(get_tournament)) -> dict[str, Any]:
    """Current schedule; empty if never generated or invalidated."""
    return svc.get_schedule().to_dict()


@app.get("/gameweeks")
def list_gameweeks(svc: TournamentService = Depends(get_tournament)) -> dict[str, Any]:
    return {"gameweeks": svc.list_gameweeks()}


@app.get("/gameweeks/{gameweek}")
def get_gameweek(
    gameweek: int = Path(..., ge=1),
    svc: TournamentService = Depends(get_tournament),
) -> dict[str, Any]:
    """Fixtures for one gameweek; empty list if the gameweek has none."""
    fixtures = svc.get_fixtures_by_gameweek(gameweek)
    return {"gameweek": gameweek, "fixtures": [f.to_dict() for f in fixtures]}


@app.get("/summary")
def get_summary(svc: TournamentService = Depends(get_tournament)) -> dict[str, Any]:
    """Closed-form match and gameweek totals for the current participants."""
    return svc.summary().to_dict()
