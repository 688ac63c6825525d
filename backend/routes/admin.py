# backend/routes/admin.py
import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from database import get_db
from models.users import Role, User
from models.gate import Gate
from models.sighting import Sighting
from models.accommodation import (
    Accommodation, AccommodationAmenity, AccommodationImage, AccommodationReview,
)
from schemas.user import TokenData, UserResponse
from utils.tokenJWT import require_role
import seed

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger(__name__)

admin_only = require_role(Role.ADMIN.value)


# Schema for paginated user list response
class PaginatedUsersResponse(BaseModel):
    items: List[UserResponse]
    total: int
    page: int
    page_size: int


class DataSummary(BaseModel):
    users: int
    gates: int
    sightings: int
    accommodations: int
    reviews: int
    images: int
    amenities: int


# Retrieve a list of users with filtering, sorting, and pagination (Admin only)
@router.get("/users", response_model=PaginatedUsersResponse)
def get_all_users(
    q: Optional[str] = Query(None, description="Search by email"),
    role: Optional[Role] = Query(None, description="Filter by role"),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    sort_by: Literal["id", "email", "role", "first_name", "last_name"] = "id",
    order: Literal["asc", "desc"] = "asc",
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(admin_only),
):
    query = db.query(User)

    if q:
        query = query.filter(User.email.ilike(f"%{q.lower()}%"))
    if role:
        query = query.filter(User.role == role.value)

    sort_map = {
        "id": User.id,
        "email": User.email,
        "role": User.role,
        "first_name": User.first_name,
        "last_name": User.last_name,
    }
    col = sort_map.get(sort_by, User.id)
    query = query.order_by(col.asc() if order == "asc" else col.desc())

    total = query.count()
    users = query.offset((page - 1) * page_size).limit(page_size).all()

    return {
        "items": users,
        "total": total,
        "page": page,
        "page_size": page_size,
    }


# Row counts per table
@router.get("/summary", response_model=DataSummary)
def data_summary(
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(admin_only),
):
    return DataSummary(
        users=db.query(User).count(),
        gates=db.query(Gate).count(),
        sightings=db.query(Sighting).count(),
        accommodations=db.query(Accommodation).count(),
        reviews=db.query(AccommodationReview).count(),
        images=db.query(AccommodationImage).count(),
        amenities=db.query(AccommodationAmenity).count(),
    )


# Replace gates and sightings with the sample set
@router.post("/setup-data")
def setup_wildlife_data(
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(admin_only),
):
    loaded = seed.reset_wildlife(db)
    logger.info("Sample wildlife data reloaded by user %s: %s", current_user.user_id, loaded)
    return {"success": True, "message": "Sample wildlife data loaded", "data_loaded": loaded}


# Replace accommodations (with images, amenities, reviews) with the sample set
@router.post("/setup-accommodations")
def setup_accommodations(
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(admin_only),
):
    loaded = seed.reset_accommodations(db)
    logger.info("Sample accommodations reloaded by user %s: %s", current_user.user_id, loaded)
    return {"success": True, "message": "Sample accommodations data loaded", "data_loaded": loaded}


# Bulk reset of everything except user accounts
@router.post("/reset-all")
def reset_all(
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(admin_only),
):
    seed.reset_all(db)
    logger.warning("All park data cleared by user %s", current_user.user_id)
    return {"message": "All data cleared successfully"}
