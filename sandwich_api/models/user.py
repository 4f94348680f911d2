"""
User account data models and database schemas
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from pydantic import BaseModel, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel
from sandwich_api.core.database import Base

# Database Models

class User(Base):
    """User account database model"""
    __tablename__ = "tb_users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255))
    created_at = Column(DateTime, default=datetime.utcnow)
    is_admin = Column(Boolean, default=False)
    mfa_secret = Column(String(255))  # presence gates login behind a second factor


# Pydantic Models for API

class Credentials(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class RegisterRequest(Credentials):
    pass


class LoginRequest(Credentials):
    pass


class LoginResponse(BaseModel):
    token: Optional[str] = None
    requires_mfa: Optional[bool] = None
    mfa_token: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmailExists(BaseModel):
    exists: bool
