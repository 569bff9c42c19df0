"""
Pydantic schemas for request and response data validation.
Defines data structures for API endpoints with automatic validation and serialization.
"""
from pydantic import BaseModel, ConfigDict, field_validator
from datetime import date, datetime
from typing import Any, Dict, Optional, List


class ImageResponse(BaseModel):
    """An image linked to a parent entity."""
    id: int
    path: str
    title: Optional[str] = None
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ImageSubmission(BaseModel):
    """
    One entry of the JSON-encoded ``images`` form field.
    Entries without ``id`` are new images; entries with ``id`` overwrite
    the existing image row.
    """
    id: Optional[int] = None
    path: str
    title: Optional[str] = None
    description: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("path")
    @classmethod
    def validate_path(cls, v):
        if not v or not v.strip():
            raise ValueError("Image path must not be empty")
        return v


# Content payloads (built from submitted form fields)

class AboutSectionPayload(BaseModel):
    text: str


class AlbumPayload(BaseModel):
    date: date
    title: str
    description: str


class BlogPostPayload(BaseModel):
    title: str
    subtitle: Optional[str] = None
    text: str


class WorkPayload(BaseModel):
    date: date
    title: str
    description: str
    link: Optional[str] = None


class ContactPayload(BaseModel):
    name: str
    contact: str
    mail: str
    address: Optional[str] = None
    phone: Optional[str] = None


class EventPayload(BaseModel):
    name: str
    dates: str
    location: str
    link: Optional[str] = None


class SocialMediaPayload(BaseModel):
    name: str
    link: str


# Content responses

class AboutSectionResponse(BaseModel):
    id: int
    text: str
    images: List[ImageResponse] = []


class AlbumResponse(BaseModel):
    id: int
    date: date
    title: str
    description: str
    images: List[ImageResponse] = []


class BlogPostResponse(BaseModel):
    id: int
    date: datetime
    title: str
    subtitle: Optional[str] = None
    text: str
    images: List[ImageResponse] = []


class WorkResponse(BaseModel):
    id: int
    date: date
    title: str
    description: str
    link: Optional[str] = None
    images: List[ImageResponse] = []


class ContactResponse(BaseModel):
    id: int
    name: str
    contact: str
    mail: str
    address: Optional[str] = None
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class EventResponse(BaseModel):
    id: int
    name: str
    dates: str
    location: str
    link: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SocialMediaResponse(BaseModel):
    id: int
    name: str
    link: str

    model_config = ConfigDict(from_attributes=True)


# Write results

class CreatedResponse(BaseModel):
    """
    Response schema for POST endpoints.
    ``image_ids`` is only set for resources that own images.
    """
    message: str
    id: int
    image_ids: Optional[List[int]] = None


class MessageResponse(BaseModel):
    message: str
    id: Optional[int] = None


# Authentication

class UserResponse(BaseModel):
    id: int
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


class PasswordResetResponse(BaseModel):
    message: str
    user: UserResponse


class TokenValidResponse(BaseModel):
    message: str
    claims: Dict[str, Any]
