# backend/models/users.py
import enum

from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base

# Fixed set of account roles, lowest privilege last
class Role(str, enum.Enum):
    ADMIN = "admin"
    RANGER = "ranger"
    VISITOR = "visitor"

# Represents a user account with authentication details and system role
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(
        String(20),
        CheckConstraint("role IN ('admin', 'ranger', 'visitor')", name="ck_users_role"),
        nullable=False,
        default=Role.VISITOR.value,
    )
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    sightings = relationship("Sighting", back_populates="reporter")
