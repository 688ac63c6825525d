# schemas/wildlife.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from models.sighting import Probability, Confidence


# Sighting enriched with gate and reporter names; missing relations stay null
class SightingOut(BaseModel):
    id: int
    gate_id: Optional[int] = None
    animal_type: str
    probability: str
    confidence: str
    notes: Optional[str] = None
    reported_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    gate_name: Optional[str] = None
    gate_location: Optional[str] = None
    reporter_first_name: Optional[str] = None
    reporter_last_name: Optional[str] = None


class SightingPage(BaseModel):
    sightings: List[SightingOut]
    total: int
    limit: Optional[int] = None
    offset: Optional[int] = None


class SightingCreate(BaseModel):
    gate_id: int
    animal_type: str = Field(min_length=1)
    probability: Probability
    confidence: Confidence = Confidence.REPORTED
    notes: Optional[str] = None

    @field_validator("animal_type")
    @classmethod
    def normalize_animal(cls, value: str) -> str:
        return value.strip().lower()


class SightingUpdate(BaseModel):
    gate_id: Optional[int] = None
    animal_type: Optional[str] = Field(default=None, min_length=1)
    probability: Optional[Probability] = None
    confidence: Optional[Confidence] = None
    notes: Optional[str] = None

    @field_validator("animal_type")
    @classmethod
    def normalize_animal(cls, value: Optional[str]) -> Optional[str]:
        return value.strip().lower() if value is not None else None


class GateOut(BaseModel):
    id: int
    gate_name: str
    description: Optional[str] = None
    location: Optional[str] = None
    created_at: Optional[datetime] = None
    sighting_count: int = 0
    last_updated: Optional[datetime] = None


# === Statistics ===

class AnimalCount(BaseModel):
    animal_type: str
    count: int

class ProbabilityCount(BaseModel):
    probability: str
    count: int

class GateCount(BaseModel):
    gate_name: str
    count: int

class DailyActivity(BaseModel):
    date: str
    count: int

class TopReporter(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    sighting_count: int

class StatsResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int
    by_animal: List[AnimalCount]
    by_probability: List[ProbabilityCount]
    by_gate: List[GateCount]
    recent_activity: List[DailyActivity]
    top_reporters: List[TopReporter]
    generated_at: datetime
