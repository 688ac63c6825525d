# backend/models/accommodation.py
import enum
from typing import Optional

from sqlalchemy import (
    Column, Integer, String, Float, Boolean, DateTime, ForeignKey,
    CheckConstraint, UniqueConstraint, func,
)
from sqlalchemy.orm import relationship
from database import Base


# Ordinal price tiers, stored as their rank and shown as "$".."$$$$"
class PriceTier(enum.IntEnum):
    BUDGET = 1
    MODERATE = 2
    PREMIUM = 3
    LUXURY = 4

    @property
    def symbol(self) -> str:
        return "$" * self.value

    @classmethod
    def from_symbol(cls, symbol: Optional[str]) -> Optional["PriceTier"]:
        """Map "$".."$$$$" to a tier; anything else maps to None."""
        if not symbol:
            return None
        symbol = symbol.strip()
        if set(symbol) != {"$"}:
            return None
        try:
            return cls(len(symbol))
        except ValueError:
            return None


FEATURED_MIN_GUEST_RATING = 4.5


# A lodging listing with denormalized rating fields kept in sync with its reviews
class Accommodation(Base):
    __tablename__ = "accommodations"
    __table_args__ = (
        CheckConstraint("star_rating IS NULL OR (star_rating >= 1 AND star_rating <= 5)", name="ck_accommodations_stars"),
        CheckConstraint("price_tier IS NULL OR (price_tier >= 1 AND price_tier <= 4)", name="ck_accommodations_price"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    type = Column(String, nullable=False, index=True)
    description = Column(String, nullable=True)

    star_rating = Column(Integer, nullable=True)
    guest_rating = Column(Float, nullable=True)
    review_count = Column(Integer, nullable=False, default=0)
    price_tier = Column(Integer, nullable=True)

    location = Column(String, nullable=True)
    proximity_to_gates = Column(String, nullable=True)
    contact_info = Column(String, nullable=True)
    website_url = Column(String, nullable=True)
    booking_info = Column(String, nullable=True)

    is_women_owned = Column(Boolean, nullable=False, default=False)
    is_eco_friendly = Column(Boolean, nullable=False, default=False)
    is_family_friendly = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    amenities = relationship("AccommodationAmenity", back_populates="accommodation", order_by="AccommodationAmenity.name")
    reviews = relationship(
        "AccommodationReview",
        back_populates="accommodation",
        order_by=lambda: (AccommodationReview.created_at.desc(), AccommodationReview.id.desc()),
    )
    images = relationship(
        "AccommodationImage",
        back_populates="accommodation",
        order_by=lambda: (AccommodationImage.is_primary.desc(), AccommodationImage.id),
    )

    @property
    def price_range(self) -> Optional[str]:
        return PriceTier(self.price_tier).symbol if self.price_tier else None

    @property
    def amenity_names(self):
        return [a.name for a in self.amenities]


# One amenity tag per row; (accommodation, name) is unique so tags form a set
class AccommodationAmenity(Base):
    __tablename__ = "accommodation_amenities"
    __table_args__ = (
        UniqueConstraint("accommodation_id", "name", name="uq_accommodation_amenity"),
    )

    id = Column(Integer, primary_key=True)
    accommodation_id = Column(Integer, ForeignKey("accommodations.id"), nullable=False, index=True)
    name = Column(String(50), nullable=False, index=True)

    accommodation = relationship("Accommodation", back_populates="amenities")


# Guest review; immutable once written
class AccommodationReview(Base):
    __tablename__ = "accommodation_reviews"

    id = Column(Integer, primary_key=True, index=True)
    accommodation_id = Column(Integer, ForeignKey("accommodations.id"), nullable=False, index=True)
    guest_name = Column(String, nullable=True)
    rating = Column(Integer, CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating"), nullable=False)
    comment = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    accommodation = relationship("Accommodation", back_populates="reviews")


# Image metadata only; the binary lives wherever image_url points
class AccommodationImage(Base):
    __tablename__ = "accommodation_images"

    id = Column(Integer, primary_key=True, index=True)
    accommodation_id = Column(Integer, ForeignKey("accommodations.id"), nullable=False, index=True)
    image_url = Column(String, nullable=False)
    caption = Column(String, nullable=True)
    is_primary = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    accommodation = relationship("Accommodation", back_populates="images")
