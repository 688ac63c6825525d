# backend/models/sighting.py
import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base


# Reporter's likelihood that the animal is still around, strongest first
class Probability(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return list(Probability).index(self)


# Evidence quality, independent of probability, strongest first
class Confidence(str, enum.Enum):
    CONFIRMED = "confirmed"
    REPORTED = "reported"
    SUSPECTED = "suspected"

    @property
    def rank(self) -> int:
        return list(Confidence).index(self)


BIG_FIVE = ("lion", "elephant", "leopard", "rhino", "buffalo")


# A single animal observation near a park gate
class Sighting(Base):
    __tablename__ = "wildlife_sightings"
    __table_args__ = (
        CheckConstraint("probability IN ('high', 'medium', 'low')", name="ck_sightings_probability"),
        CheckConstraint("confidence IN ('confirmed', 'reported', 'suspected')", name="ck_sightings_confidence"),
    )

    id = Column(Integer, primary_key=True, index=True)
    # Soft reference: reads outer-join so a dangling gate only nulls the gate fields
    gate_id = Column(Integer, ForeignKey("park_gates.id"), nullable=True, index=True)
    animal_type = Column(String, nullable=False, index=True)
    probability = Column(String(10), nullable=False)
    confidence = Column(String(10), nullable=False)
    notes = Column(String, nullable=True)
    reported_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    gate = relationship("Gate", back_populates="sightings")
    reporter = relationship("User", back_populates="sightings")
