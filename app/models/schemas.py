from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def normalize_email(value: str) -> str:
    return value.strip().lower()


class BookingCreate(BaseModel):
    # Anything the booking form sends besides these is stored as is
    model_config = ConfigDict(extra="allow")

    email: EmailStr
    customerName: Optional[str] = None
    phone: Optional[str] = None
    serviceId: Optional[str] = None
    serviceName: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    date: Optional[str] = None
    message: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v: Any) -> Any:
        if isinstance(v, str):
            return normalize_email(v)
        return v


class SessionClaims(BaseModel):
    """Whatever the client wants asserted in its session (e.g. email, role)."""
    model_config = ConfigDict(extra="allow")
