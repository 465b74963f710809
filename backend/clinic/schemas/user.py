from datetime import datetime
from typing import Optional
from clinic.schemas.common import CamelModel


class LoginRequest(CamelModel):
    assertion: str


class UpsertUser(CamelModel):
    """Profile claims taken from a verified identity assertion. Role is not among them."""
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None


class UserResponse(CamelModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
