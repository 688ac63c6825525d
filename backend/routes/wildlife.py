# backend/routes/wildlife.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import Role
from schemas.user import TokenData
from schemas.wildlife import (
    GateOut, SightingCreate, SightingOut, SightingPage, SightingUpdate, StatsResponse,
)
from utils import sighting_queries
from utils.sighting_stats import sighting_stats
from utils.tokenJWT import require_role

router = APIRouter(prefix="/wildlife", tags=["Wildlife"])


# All sightings, newest first, with gate and reporter names
@router.get("", response_model=List[SightingOut])
def list_all_sightings(db: Session = Depends(get_db)):
    return sighting_queries.list_sightings(db)


@router.get("/stats", response_model=StatsResponse)
def get_stats(db: Session = Depends(get_db)):
    return sighting_stats(db)


@router.get("/gates", response_model=List[GateOut])
def list_gates(db: Session = Depends(get_db)):
    return sighting_queries.list_gates(db)


@router.get("/gates/{gate_id}/sightings", response_model=List[SightingOut])
def list_gate_sightings(gate_id: int, db: Session = Depends(get_db)):
    return sighting_queries.gate_sightings(db, gate_id)


@router.get("/best-gates", response_model=List[SightingOut])
def get_best_gates(
    animals: Optional[str] = Query(None, description="Comma-separated animal types"),
    db: Session = Depends(get_db),
):
    return sighting_queries.best_gates(db, animals or "")


@router.get("/big-five-summary", response_model=List[SightingOut])
def get_big_five_summary(db: Session = Depends(get_db)):
    return sighting_queries.big_five_summary(db)


@router.get("/sightings", response_model=SightingPage)
def search_sightings(
    limit: Optional[int] = Query(None, ge=0, le=1000),
    offset: Optional[int] = Query(None, ge=0),
    animal: Optional[str] = Query(None),
    gate: Optional[str] = Query(None, description="Gate name"),
    probability: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    sightings, total = sighting_queries.search_sightings(
        db, limit=limit, offset=offset, animal=animal, gate=gate, probability=probability,
    )
    return {"sightings": sightings, "total": total, "limit": limit, "offset": offset}


@router.get("/sightings/{sighting_id}", response_model=SightingOut)
def get_sighting(sighting_id: int, db: Session = Depends(get_db)):
    return sighting_queries.get_sighting(db, sighting_id)


# Rangers report sightings from the field
@router.post("/sightings", response_model=SightingOut, status_code=status.HTTP_201_CREATED)
def report_sighting(
    payload: SightingCreate,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_role(Role.RANGER.value)),
):
    return sighting_queries.create_sighting(db, payload, reporter_id=current_user.user_id)


@router.put("/sightings/{sighting_id}", response_model=SightingOut)
def edit_sighting(
    sighting_id: int,
    payload: SightingUpdate,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_role(Role.RANGER.value)),
):
    return sighting_queries.update_sighting(db, sighting_id, payload)
