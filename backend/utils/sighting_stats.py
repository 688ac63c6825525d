# backend/utils/sighting_stats.py
import logging
from datetime import datetime, timedelta, time
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.gate import Gate
from models.sighting import Sighting
from models.users import User

logger = logging.getLogger(__name__)

ACTIVITY_DAYS = 7
TOP_REPORTERS_LIMIT = 5


def count_by_animal(db: Session) -> List[dict]:
    count = func.count(Sighting.id)
    rows = (
        db.query(Sighting.animal_type, count.label("count"))
        .group_by(Sighting.animal_type)
        .order_by(count.desc(), Sighting.animal_type)
        .all()
    )
    return [{"animal_type": animal, "count": n} for animal, n in rows]


def count_by_probability(db: Session) -> List[dict]:
    count = func.count(Sighting.id)
    rows = (
        db.query(Sighting.probability, count.label("count"))
        .group_by(Sighting.probability)
        .order_by(count.desc(), Sighting.probability)
        .all()
    )
    return [{"probability": probability, "count": n} for probability, n in rows]


# Outer join keeps gates that have no sightings, with a zero count
def count_by_gate(db: Session) -> List[dict]:
    count = func.count(Sighting.id)
    rows = (
        db.query(Gate.gate_name, count.label("count"))
        .outerjoin(Sighting, Sighting.gate_id == Gate.id)
        .group_by(Gate.id, Gate.gate_name)
        .order_by(count.desc(), Gate.gate_name)
        .all()
    )
    return [{"gate_name": name, "count": n} for name, n in rows]


def daily_activity(db: Session, now: Optional[datetime] = None) -> List[dict]:
    """Sightings per day over the last week, oldest day first, zero-filled."""
    today = (now or datetime.utcnow()).date()
    first_day = today - timedelta(days=ACTIVITY_DAYS - 1)

    day = func.date(Sighting.created_at)
    rows = (
        db.query(day.label("date"), func.count(Sighting.id).label("count"))
        .filter(Sighting.created_at >= datetime.combine(first_day, time.min))
        .group_by(day)
        .all()
    )
    counts_by_date = {str(row.date): row.count for row in rows}

    result = []
    for i in range(ACTIVITY_DAYS):
        date_str = (first_day + timedelta(days=i)).strftime("%Y-%m-%d")
        result.append({"date": date_str, "count": counts_by_date.get(date_str, 0)})
    return result


def top_reporters(db: Session) -> List[dict]:
    count = func.count(Sighting.id)
    rows = (
        db.query(User.first_name, User.last_name, count.label("sighting_count"))
        .select_from(Sighting)
        .join(User, Sighting.reported_by == User.id)
        .group_by(User.id, User.first_name, User.last_name)
        .order_by(count.desc(), User.id)
        .limit(TOP_REPORTERS_LIMIT)
        .all()
    )
    return [
        {"first_name": first, "last_name": last, "sighting_count": n}
        for first, last, n in rows
    ]


def sighting_stats(db: Session, now: Optional[datetime] = None) -> dict:
    total = db.query(func.count(Sighting.id)).scalar() or 0

    stats = {
        "total": total,
        "by_animal": count_by_animal(db),
        "by_probability": count_by_probability(db),
        "by_gate": count_by_gate(db),
        "recent_activity": daily_activity(db, now),
        "top_reporters": [],
        "generated_at": datetime.utcnow(),
    }

    # The leaderboard is optional; losing it must not fail the whole summary
    try:
        stats["top_reporters"] = top_reporters(db)
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Top reporters query failed, returning empty leaderboard: %s", e)

    return stats
