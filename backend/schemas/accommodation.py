# backend/schemas/accommodation.py
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List, Union

from models.accommodation import PriceTier


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


def split_amenities(value: Union[str, List[str], None]) -> List[str]:
    """Accept "pool,spa" or ["pool", "spa"]; returns a de-duplicated, ordered list."""
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else value
    seen = []
    for item in items:
        name = str(item).strip().lower()
        if name and name not in seen:
            seen.append(name)
    return seen


# Schema for creating a new accommodation
class AccommodationCreate(BaseModel):
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    description: Optional[str] = None
    star_rating: Optional[int] = Field(default=None, ge=1, le=5)
    guest_rating: Optional[float] = Field(default=None, ge=0, le=5)
    price_range: Optional[str] = None
    amenities: List[str] = []
    location: Optional[str] = None
    proximity_to_gates: Optional[str] = None
    contact_info: Optional[str] = None
    website_url: Optional[str] = None
    booking_info: Optional[str] = None
    is_women_owned: bool = False
    is_eco_friendly: bool = False
    is_family_friendly: bool = False

    @field_validator("name", "type")
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name and type are required")
        return value

    @field_validator("price_range")
    @classmethod
    def known_price_tier(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == "":
            return None
        if PriceTier.from_symbol(value) is None:
            raise ValueError("price_range must be one of $, $$, $$$, $$$$")
        return value.strip()

    @field_validator("amenities", mode="before")
    @classmethod
    def parse_amenities(cls, value):
        return split_amenities(value)


class ReviewCreate(BaseModel):
    guest_name: Optional[str] = None
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = None


class ReviewOut(ORMBase):
    id: int
    accommodation_id: int
    guest_name: Optional[str] = None
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None


class ImageOut(ORMBase):
    id: int
    image_url: str
    caption: Optional[str] = None
    is_primary: bool = False


# API shape of an accommodation with its per-row aggregates
class AccommodationOut(BaseModel):
    id: int
    name: str
    type: str
    description: Optional[str] = None
    star_rating: int = 0
    guest_rating: float = 0.0
    review_count: int = 0
    price_range: Optional[str] = None
    amenities: List[str] = []
    location: Optional[str] = None
    proximity_to_gates: Optional[str] = None
    contact_info: Optional[str] = None
    website_url: Optional[str] = None
    booking_info: Optional[str] = None
    is_women_owned: bool = False
    is_eco_friendly: bool = False
    is_family_friendly: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    images: List[str] = []
    average_rating: Optional[float] = None
    total_reviews: int = 0


class AccommodationDetail(AccommodationOut):
    reviews: List[ReviewOut] = []
    image_details: List[ImageOut] = []


class ReviewCreated(BaseModel):
    message: str
    review: ReviewOut
    guest_rating: float
    review_count: int
