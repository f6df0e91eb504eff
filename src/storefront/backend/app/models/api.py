"""Pydantic models describing the public API surface."""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "ForgotPasswordRequest",
    "ProfileUpdateRequest",
    "CategoryRequest",
    "ProductForm",
    "ProductFilterRequest",
    "PRODUCT_REQUIRED_FIELDS",
    "format_validation_error",
]


def _strip(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


class RegisterRequest(BaseModel):
    """Sign-up form submitted by a new customer."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)

    @field_validator("name", "email", "phone", "address", "answer", mode="before")
    @classmethod
    def _strip_fields(cls, value: Any) -> Any:
        return _strip(value)

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("value is not a valid email address")
        return value.lower()


class LoginRequest(BaseModel):
    """Credentials posted by the login form."""

    model_config = ConfigDict(extra="ignore")

    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def _normalise_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class ForgotPasswordRequest(BaseModel):
    """Security-answer based password reset."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    email: str
    answer: str
    new_password: str = Field(..., alias="newPassword", min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def _normalise_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted fields keep their stored values."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    password: str | None = None
    phone: str | None = None
    address: str | None = None

    @field_validator("password")
    @classmethod
    def _check_password_length(cls, value: str | None) -> str | None:
        if value is not None and len(value) < 6:
            raise ValueError("Password is required and 6 character long")
        return value


class CategoryRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return _strip(value)


# Checked in this order so the first missing field is the one reported.
PRODUCT_REQUIRED_FIELDS: tuple[str, ...] = (
    "name",
    "description",
    "price",
    "category",
    "quantity",
)


class ProductForm(BaseModel):
    """Text fields of the multipart create/update product form."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    category: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=0)
    shipping: bool = False

    @field_validator("name", "description", "category", mode="before")
    @classmethod
    def _strip_fields(cls, value: Any) -> Any:
        return _strip(value)

    @field_validator("shipping", mode="before")
    @classmethod
    def _coerce_shipping(cls, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)


class ProductFilterRequest(BaseModel):
    """Sidebar filters: checked category ids and an optional price range."""

    model_config = ConfigDict(extra="ignore")

    checked: list[str] = Field(default_factory=list)
    radio: list[float] = Field(default_factory=list)

    @field_validator("radio")
    @classmethod
    def _validate_range(cls, value: list[float]) -> list[float]:
        if value and len(value) != 2:
            raise ValueError("price range must contain a minimum and a maximum")
        if value and value[0] > value[1]:
            raise ValueError("price range minimum cannot exceed the maximum")
        return value


def format_validation_error(error: ValidationError, *, subject: str = "payload") -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        if "greater than or equal to 0" in message.lower():
            message = "value cannot be negative"
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid {subject}: {details}"
