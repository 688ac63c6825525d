# backend/utils/accommodation_queries.py
"""Filtering, aggregation and review bookkeeping for accommodations.

Every list query is a single statement: review aggregates come from a grouped
subquery that is outer-joined per accommodation, so image and review counts never
multiply each other. Images and amenities are loaded in one extra SELECT each.
"""
import logging
from typing import Iterable, List, Optional, Union

from sqlalchemy import false, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from models.accommodation import (
    Accommodation, AccommodationAmenity, AccommodationReview,
    PriceTier, FEATURED_MIN_GUEST_RATING,
)
from schemas.accommodation import (
    AccommodationCreate, ReviewCreate, ReviewOut, ImageOut, split_amenities,
)
from utils.errors import NotFoundError, StorageError

logger = logging.getLogger(__name__)


def _review_stats(db: Session):
    return (
        db.query(
            AccommodationReview.accommodation_id.label("accommodation_id"),
            func.avg(AccommodationReview.rating).label("average_rating"),
            func.count(AccommodationReview.id).label("total_reviews"),
        )
        .group_by(AccommodationReview.accommodation_id)
        .subquery()
    )


def _base_query(db: Session):
    stats = _review_stats(db)
    return (
        db.query(Accommodation, stats.c.average_rating, stats.c.total_reviews)
        .outerjoin(stats, stats.c.accommodation_id == Accommodation.id)
        .options(selectinload(Accommodation.images), selectinload(Accommodation.amenities))
    )


def serialize_accommodation(acc: Accommodation, average_rating=None, total_reviews=None) -> dict:
    return {
        "id": acc.id,
        "name": acc.name,
        "type": acc.type,
        "description": acc.description,
        "star_rating": int(acc.star_rating or 0),
        "guest_rating": float(acc.guest_rating or 0),
        "review_count": int(acc.review_count or 0),
        "price_range": acc.price_range,
        "amenities": acc.amenity_names,
        "location": acc.location,
        "proximity_to_gates": acc.proximity_to_gates,
        "contact_info": acc.contact_info,
        "website_url": acc.website_url,
        "booking_info": acc.booking_info,
        "is_women_owned": bool(acc.is_women_owned),
        "is_eco_friendly": bool(acc.is_eco_friendly),
        "is_family_friendly": bool(acc.is_family_friendly),
        "created_at": acc.created_at,
        "updated_at": acc.updated_at,
        "images": [img.image_url for img in acc.images],
        "average_rating": round(float(average_rating), 1) if average_rating is not None else None,
        "total_reviews": int(total_reviews or 0),
    }


def list_accommodations(
    db: Session,
    type: Optional[str] = None,
    min_rating: Optional[float] = None,
    max_price: Optional[str] = None,
    amenities: Union[str, Iterable[str], None] = None,
    gate_proximity: Optional[str] = None,
    featured: bool = False,
) -> List[dict]:
    """List accommodations matching every supplied filter.

    min_rating matches on guest rating OR star rating. max_price compares price
    tiers by rank; an unknown tier matches nothing. Each listed amenity must be
    in the accommodation's amenity set.
    """
    query = _base_query(db)

    if type:
        query = query.filter(Accommodation.type == type)

    if min_rating is not None:
        query = query.filter(or_(
            Accommodation.guest_rating >= min_rating,
            Accommodation.star_rating >= min_rating,
        ))

    if max_price:
        tier = PriceTier.from_symbol(max_price)
        if tier is None:
            query = query.filter(false())
        else:
            query = query.filter(Accommodation.price_tier <= tier.value)

    for amenity in split_amenities(amenities):
        query = query.filter(Accommodation.amenities.any(AccommodationAmenity.name == amenity))

    if gate_proximity:
        query = query.filter(Accommodation.proximity_to_gates.ilike(f"%{gate_proximity}%"))

    if featured:
        query = query.filter(Accommodation.guest_rating >= FEATURED_MIN_GUEST_RATING)

    rows = query.order_by(
        Accommodation.guest_rating.desc(),
        Accommodation.star_rating.desc(),
        Accommodation.id.asc(),
    ).all()

    return [serialize_accommodation(acc, avg, total) for acc, avg, total in rows]


def get_accommodation(db: Session, accommodation_id: int) -> dict:
    row = (
        _base_query(db)
        .options(selectinload(Accommodation.reviews))
        .filter(Accommodation.id == accommodation_id)
        .first()
    )
    if row is None:
        raise NotFoundError("Accommodation not found")

    acc, avg, total = row
    data = serialize_accommodation(acc, avg, total)
    data["reviews"] = [ReviewOut.model_validate(r).model_dump() for r in acc.reviews]
    data["image_details"] = [ImageOut.model_validate(i).model_dump() for i in acc.images]
    return data


def create_accommodation(db: Session, payload: AccommodationCreate) -> dict:
    tier = PriceTier.from_symbol(payload.price_range)
    acc = Accommodation(
        name=payload.name,
        type=payload.type,
        description=payload.description,
        star_rating=payload.star_rating,
        guest_rating=payload.guest_rating,
        review_count=0,
        price_tier=tier.value if tier else None,
        location=payload.location,
        proximity_to_gates=payload.proximity_to_gates,
        contact_info=payload.contact_info,
        website_url=payload.website_url,
        booking_info=payload.booking_info,
        is_women_owned=payload.is_women_owned,
        is_eco_friendly=payload.is_eco_friendly,
        is_family_friendly=payload.is_family_friendly,
    )
    acc.amenities = [AccommodationAmenity(name=name) for name in payload.amenities]

    db.add(acc)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create accommodation %r", payload.name)
        raise StorageError("Failed to create accommodation")
    db.refresh(acc)

    logger.info("Created accommodation %s (id=%s)", acc.name, acc.id)
    return serialize_accommodation(acc)


def recompute_rating(db: Session, acc: Accommodation) -> None:
    """Set guest_rating and review_count from the accommodation's reviews."""
    avg, count = (
        db.query(func.avg(AccommodationReview.rating), func.count(AccommodationReview.id))
        .filter(AccommodationReview.accommodation_id == acc.id)
        .one()
    )
    acc.guest_rating = float(avg) if avg is not None else None
    acc.review_count = int(count or 0)
    acc.updated_at = func.now()


def add_review(db: Session, accommodation_id: int, payload: ReviewCreate):
    acc = db.query(Accommodation).filter(Accommodation.id == accommodation_id).first()
    if acc is None:
        raise NotFoundError("Accommodation not found")

    review = AccommodationReview(
        accommodation_id=acc.id,
        guest_name=payload.guest_name,
        rating=payload.rating,
        comment=payload.comment,
    )
    db.add(review)
    try:
        db.flush()
        recompute_rating(db, acc)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to add review for accommodation %s", accommodation_id)
        raise StorageError("Failed to add review")
    db.refresh(acc)
    db.refresh(review)

    logger.info("Added review for accommodation %s, guest rating now %.2f", acc.id, acc.guest_rating)
    return review, acc


def accommodations_near_gate(db: Session, gate_name: str) -> List[dict]:
    return list_accommodations(db, gate_proximity=gate_name)
