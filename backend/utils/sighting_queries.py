# backend/utils/sighting_queries.py
"""Read and write paths for wildlife sightings.

Gate and reporter are always outer-joined: a sighting whose gate or reporter is
missing is still returned, with the joined name fields set to None.
"""
import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.gate import Gate
from models.sighting import Sighting, Probability, Confidence, BIG_FIVE
from models.users import User
from schemas.wildlife import SightingCreate, SightingUpdate
from utils.errors import NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

BEST_GATES_WINDOW_DAYS = 7
BIG_FIVE_WINDOW_DAYS = 30

# high before medium before low; confirmed before reported before suspected
PROBABILITY_ORDER = case({p.value: p.rank for p in Probability}, value=Sighting.probability, else_=len(Probability))
CONFIDENCE_ORDER = case({c.value: c.rank for c in Confidence}, value=Sighting.confidence, else_=len(Confidence))


def _enriched_query(db: Session):
    return (
        db.query(
            Sighting,
            Gate.gate_name,
            Gate.location.label("gate_location"),
            User.first_name.label("reporter_first_name"),
            User.last_name.label("reporter_last_name"),
        )
        .outerjoin(Gate, Sighting.gate_id == Gate.id)
        .outerjoin(User, Sighting.reported_by == User.id)
    )


def _newest_first(query):
    return query.order_by(Sighting.created_at.desc(), Sighting.id.desc())


def serialize_sighting(row) -> dict:
    sighting, gate_name, gate_location, first_name, last_name = row
    return {
        "id": sighting.id,
        "gate_id": sighting.gate_id,
        "animal_type": sighting.animal_type,
        "probability": sighting.probability,
        "confidence": sighting.confidence,
        "notes": sighting.notes,
        "reported_by": sighting.reported_by,
        "created_at": sighting.created_at,
        "updated_at": sighting.updated_at,
        "gate_name": gate_name,
        "gate_location": gate_location,
        "reporter_first_name": first_name,
        "reporter_last_name": last_name,
    }


def list_sightings(db: Session) -> List[dict]:
    return [serialize_sighting(row) for row in _newest_first(_enriched_query(db)).all()]


def search_sightings(
    db: Session,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    animal: Optional[str] = None,
    gate: Optional[str] = None,
    probability: Optional[str] = None,
) -> Tuple[List[dict], int]:
    """Filtered, paginated sightings plus the total count before pagination."""
    query = _enriched_query(db)

    if animal:
        query = query.filter(Sighting.animal_type == animal.strip().lower())
    if gate:
        query = query.filter(Gate.gate_name == gate)
    if probability:
        query = query.filter(Sighting.probability == probability)

    total = query.count()

    query = _newest_first(query)
    if offset:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)

    return [serialize_sighting(row) for row in query.all()], total


def get_sighting(db: Session, sighting_id: int) -> dict:
    row = _enriched_query(db).filter(Sighting.id == sighting_id).first()
    if row is None:
        raise NotFoundError("Sighting not found")
    return serialize_sighting(row)


def list_gates(db: Session) -> List[dict]:
    rows = (
        db.query(
            Gate,
            func.count(Sighting.id).label("sighting_count"),
            func.max(Sighting.created_at).label("last_updated"),
        )
        .outerjoin(Sighting, Sighting.gate_id == Gate.id)
        .group_by(Gate.id)
        .order_by(Gate.gate_name)
        .all()
    )
    return [
        {
            "id": gate.id,
            "gate_name": gate.gate_name,
            "description": gate.description,
            "location": gate.location,
            "created_at": gate.created_at,
            "sighting_count": int(count or 0),
            "last_updated": last_updated,
        }
        for gate, count, last_updated in rows
    ]


def gate_sightings(db: Session, gate_id: int) -> List[dict]:
    if db.query(Gate.id).filter(Gate.id == gate_id).first() is None:
        raise NotFoundError("Gate not found")
    query = _enriched_query(db).filter(Sighting.gate_id == gate_id)
    return [serialize_sighting(row) for row in _newest_first(query).all()]


def parse_animals(animals) -> List[str]:
    if isinstance(animals, str):
        animals = animals.split(",")
    return [a.strip().lower() for a in (animals or []) if a and a.strip()]


def best_gates(db: Session, animals: Iterable[str], now: Optional[datetime] = None) -> List[dict]:
    """Recent high/medium sightings of the requested animals.

    Only reports from the last 7 days count, so stale sightings drop out
    without any expiry job.
    """
    animal_list = parse_animals(animals)
    if not animal_list:
        raise ValidationError("Animals parameter required")

    cutoff = (now or datetime.utcnow()) - timedelta(days=BEST_GATES_WINDOW_DAYS)
    query = (
        _enriched_query(db)
        .filter(
            Sighting.animal_type.in_(animal_list),
            Sighting.probability.in_([Probability.HIGH.value, Probability.MEDIUM.value]),
            Sighting.created_at > cutoff,
        )
        .order_by(PROBABILITY_ORDER, CONFIDENCE_ORDER, Sighting.created_at.desc(), Sighting.id.desc())
    )
    return [serialize_sighting(row) for row in query.all()]


def big_five_summary(db: Session, now: Optional[datetime] = None) -> List[dict]:
    cutoff = (now or datetime.utcnow()) - timedelta(days=BIG_FIVE_WINDOW_DAYS)
    query = _enriched_query(db).filter(
        Sighting.animal_type.in_(BIG_FIVE),
        Sighting.created_at > cutoff,
    )
    return [serialize_sighting(row) for row in _newest_first(query).all()]


def _require_gate(db: Session, gate_id: int) -> None:
    if db.query(Gate.id).filter(Gate.id == gate_id).first() is None:
        raise NotFoundError("Gate not found")


def create_sighting(db: Session, payload: SightingCreate, reporter_id: Optional[int]) -> dict:
    _require_gate(db, payload.gate_id)

    sighting = Sighting(
        gate_id=payload.gate_id,
        animal_type=payload.animal_type,
        probability=payload.probability.value,
        confidence=payload.confidence.value,
        notes=payload.notes,
        reported_by=reporter_id,
    )
    db.add(sighting)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to record %s sighting", payload.animal_type)
        raise StorageError("Failed to create sighting")

    logger.info("Recorded %s sighting at gate %s (id=%s)", sighting.animal_type, sighting.gate_id, sighting.id)
    return get_sighting(db, sighting.id)


def update_sighting(db: Session, sighting_id: int, payload: SightingUpdate) -> dict:
    sighting = db.query(Sighting).filter(Sighting.id == sighting_id).first()
    if sighting is None:
        raise NotFoundError("Sighting not found")

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "gate_id" in changes:
        _require_gate(db, changes["gate_id"])

    for key, value in changes.items():
        setattr(sighting, key, value.value if isinstance(value, (Probability, Confidence)) else value)
    sighting.updated_at = func.now()

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update sighting %s", sighting_id)
        raise StorageError("Failed to update sighting")

    return get_sighting(db, sighting_id)
