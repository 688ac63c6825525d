# backend/routes/accommodations.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_db
import schemas.accommodation as accommodation_schemas
from utils import accommodation_queries

router = APIRouter(prefix="/accommodations", tags=["Accommodations"])


# =========================
# LIST WITH FILTERS
# =========================
@router.get("", response_model=List[accommodation_schemas.AccommodationOut])
def list_accommodations(
    type: Optional[str] = Query(None),
    min_rating: Optional[float] = Query(None, alias="minRating", ge=0, le=5),
    max_price: Optional[str] = Query(None, alias="maxPrice", description="$, $$, $$$ or $$$$"),
    amenities: Optional[str] = Query(None, description="Comma-separated, all must match"),
    gate_proximity: Optional[str] = Query(None, alias="gateProximity"),
    featured: bool = Query(False),
    db: Session = Depends(get_db),
):
    return accommodation_queries.list_accommodations(
        db,
        type=type,
        min_rating=min_rating,
        max_price=max_price,
        amenities=amenities,
        gate_proximity=gate_proximity,
        featured=featured,
    )


@router.get("/gate/{gate_name}", response_model=List[accommodation_schemas.AccommodationOut])
def list_accommodations_near_gate(gate_name: str, db: Session = Depends(get_db)):
    return accommodation_queries.accommodations_near_gate(db, gate_name)


# =========================
# SINGLE ACCOMMODATION
# =========================
@router.get("/{accommodation_id}", response_model=accommodation_schemas.AccommodationDetail)
def get_accommodation(accommodation_id: int, db: Session = Depends(get_db)):
    return accommodation_queries.get_accommodation(db, accommodation_id)


@router.post("", response_model=accommodation_schemas.AccommodationOut, status_code=status.HTTP_201_CREATED)
def create_accommodation(
    payload: accommodation_schemas.AccommodationCreate,
    db: Session = Depends(get_db),
):
    return accommodation_queries.create_accommodation(db, payload)


# =========================
# REVIEWS
# =========================
@router.post(
    "/{accommodation_id}/reviews",
    response_model=accommodation_schemas.ReviewCreated,
    status_code=status.HTTP_201_CREATED,
)
def add_review(
    accommodation_id: int,
    payload: accommodation_schemas.ReviewCreate,
    db: Session = Depends(get_db),
):
    review, acc = accommodation_queries.add_review(db, accommodation_id, payload)
    return {
        "message": "Review added successfully",
        "review": review,
        "guest_rating": acc.guest_rating,
        "review_count": acc.review_count,
    }
