from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional

from models.users import Role

MIN_PASSWORD_LENGTH = 6

# Request bodies use the frontend's camelCase names; snake_case is accepted too
class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

# Shared properties for user models
class UserBase(BaseModel):
    email: EmailStr

# Schema for user authentication credentials
class UserLogin(UserBase):
    password: str = Field(min_length=1)

# Schema for user registration requests
class UserCreate(CamelModel, UserBase):
    password: str
    first_name: str = Field(alias="firstName", min_length=1)
    last_name: str = Field(alias="lastName", min_length=1)
    phone: Optional[str] = None
    role: Role = Role.VISITOR  # lowest privilege by default

    @field_validator("password")
    @classmethod
    def password_long_enough(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return value

# Profile edits; email and role cannot change through this path
class ProfileUpdate(CamelModel):
    first_name: Optional[str] = Field(default=None, alias="firstName", min_length=1)
    last_name: Optional[str] = Field(default=None, alias="lastName", min_length=1)
    phone: Optional[str] = None

# Public projection of a user, never includes the password hash
class UserResponse(UserBase):
    id: int
    role: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

# Token plus user, returned by register and login
class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserResponse

class ProfileResponse(BaseModel):
    message: Optional[str] = None
    user: UserResponse

# Schema for JWT payload contents
class TokenData(BaseModel):
    user_id: int
    email: Optional[str] = None
    role: Optional[str] = None
