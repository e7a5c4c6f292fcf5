"""
Pydantic request / response schemas for the HTTP API.

Wire names are camelCase; Python attributes stay snake_case.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class _ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Users
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(_ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    gender: Literal["M", "F"]
    national_id: str = Field(
        ...,
        min_length=11,
        max_length=11,
        validation_alias=AliasChoices("nationalId", "national_id", "cpf"),
    )
    address: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    birthdate: date

    @field_validator("name", "address")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


class LoginRequest(_ApiModel):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserOut(_ApiModel):
    id: uuid.UUID = Field(validation_alias=AliasChoices("user_id", "id"))
    name: str
    gender: str
    national_id: str
    address: str
    email: str
    birthdate: date
    created_at: Optional[datetime] = None


class AuthResponse(_ApiModel):
    user: UserOut
    token: str


# ═══════════════════════════════════════════════════════════════════════════════
# Locations
# ═══════════════════════════════════════════════════════════════════════════════


class LocationCreate(_ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1, max_length=255)


class LocationUpdate(_ApiModel):
    """Partial update; only fields present in the body are applied."""

    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    address: Optional[str] = Field(None, max_length=255)


class LocationOut(_ApiModel):
    id: uuid.UUID = Field(validation_alias=AliasChoices("location_id", "id"))
    name: str
    description: str
    address: str
    coordinates: Optional[str] = None
    user_id: uuid.UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MapLinkResponse(_ApiModel):
    map_link: str


# ═══════════════════════════════════════════════════════════════════════════════
# Misc
# ═══════════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    message: str
