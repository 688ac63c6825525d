# backend/models/gate.py
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from database import Base

# Named park entry point; sightings are bucketed by gate
class Gate(Base):
    __tablename__ = "park_gates"

    id = Column(Integer, primary_key=True, index=True)
    gate_name = Column(String, unique=True, nullable=False)
    description = Column(String, nullable=True)
    location = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    sightings = relationship("Sighting", back_populates="gate")
