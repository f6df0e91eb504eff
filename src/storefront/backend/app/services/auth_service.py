"""Customer accounts: registration, login, password reset and tokens."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from pydantic import ValidationError
from werkzeug.security import check_password_hash, generate_password_hash

from storefront.backend.app.http import ServiceError
from storefront.backend.app.models import (
    ForgotPasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    Role,
    format_validation_error,
    public_user,
)

from .document_store import DocumentStore

USERS = "users"

# Field name -> label used in "<label> is Required" messages, in check order.
REGISTER_REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("name", "Name"),
    ("email", "Email"),
    ("password", "Password"),
    ("phone", "Phone no"),
    ("address", "Address"),
    ("answer", "Answer"),
)

_LOGGER = logging.getLogger(__name__)


class InvalidToken(Exception):
    """Raised when a bearer token is malformed, tampered with or expired."""


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def compare_password(password: str, hashed: str) -> bool:
    return check_password_hash(hashed, password)


class TokenSigner:
    """Issue and verify signed, time-limited bearer tokens."""

    def __init__(self, secret_key: str, *, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._serializer = URLSafeTimedSerializer(secret_key, salt="storefront-auth")
        self._ttl_seconds = ttl_seconds

    def issue(self, user_id: str) -> str:
        return self._serializer.dumps({"_id": user_id})

    def verify(self, token: str) -> str:
        """Return the user id carried by ``token``."""

        try:
            payload = self._serializer.loads(token, max_age=self._ttl_seconds)
        except SignatureExpired as exc:
            raise InvalidToken("Token expired") from exc
        except BadSignature as exc:
            raise InvalidToken("Invalid token") from exc

        user_id = payload.get("_id") if isinstance(payload, Mapping) else None
        if not isinstance(user_id, str):
            raise InvalidToken("Invalid token")
        return user_id


def _missing_field(payload: Mapping[str, Any], fields: tuple[tuple[str, str], ...]) -> str | None:
    for field, label in fields:
        value = payload.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            return label
    return None


class AuthService:
    """Account operations on the ``users`` collection."""

    def __init__(self, store: DocumentStore, signer: TokenSigner) -> None:
        self._store = store
        self._signer = signer

    @property
    def signer(self) -> TokenSigner:
        return self._signer

    def register(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        missing = _missing_field(payload, REGISTER_REQUIRED_FIELDS)
        if missing is not None:
            raise ServiceError(f"{missing} is Required", error="missing_field")

        try:
            request = RegisterRequest.model_validate(payload)
        except ValidationError as error:
            raise ServiceError(format_validation_error(error, subject="registration")) from error

        if self._store.find_one(USERS, {"email": request.email}) is not None:
            raise ServiceError(
                "Already Register please login", status=200, error="already_registered"
            )

        document = self._store.insert(
            USERS,
            {
                "name": request.name,
                "email": request.email,
                "password": hash_password(request.password),
                "phone": request.phone,
                "address": request.address,
                "answer": request.answer,
                "role": int(Role.USER),
            },
        )
        _LOGGER.info("Registered user %s", document["_id"])
        return public_user(document)

    def login(self, payload: Mapping[str, Any]) -> tuple[dict[str, Any], str]:
        """Return the public user and a fresh token for valid credentials."""

        try:
            request = LoginRequest.model_validate(payload)
        except ValidationError as error:
            raise ServiceError(
                "Invalid email or password", status=404, error="invalid_credentials"
            ) from error
        if not request.email or not request.password:
            raise ServiceError("Invalid email or password", status=404, error="invalid_credentials")

        user = self._store.find_one(USERS, {"email": request.email})
        if user is None:
            raise ServiceError("Email is not registerd", status=404, error="unknown_email")

        if not compare_password(request.password, user["password"]):
            _LOGGER.info("Rejected password for user %s", user["_id"])
            raise ServiceError("Invalid Password", status=200, error="invalid_password")

        return public_user(user), self._signer.issue(user["_id"])

    def forgot_password(self, payload: Mapping[str, Any]) -> None:
        missing = _missing_field(
            payload,
            (("email", "Email"), ("answer", "Answer"), ("newPassword", "New Password")),
        )
        if missing is not None:
            raise ServiceError(f"{missing} is required", error="missing_field")

        request = ForgotPasswordRequest.model_validate(payload)
        user = self._store.find_one(USERS, {"email": request.email, "answer": request.answer})
        if user is None:
            raise ServiceError("Wrong Email Or Answer", status=404, error="not_found")

        self._store.update(USERS, user["_id"], {"password": hash_password(request.new_password)})
        _LOGGER.info("Password reset for user %s", user["_id"])

    def get_user(self, user_id: str) -> dict[str, Any]:
        """Return the stored user document; raises ``KeyError`` when missing."""

        return self._store.get(USERS, user_id)

    def is_admin(self, user_id: str) -> bool:
        try:
            user = self.get_user(user_id)
        except KeyError:
            return False
        return user.get("role") == Role.ADMIN

    def update_profile(self, user_id: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        try:
            request = ProfileUpdateRequest.model_validate(payload)
        except ValidationError as error:
            raise ServiceError(format_validation_error(error, subject="profile")) from error

        user = self.get_user(user_id)
        changes = {
            "name": request.name or user.get("name"),
            "phone": request.phone or user.get("phone"),
            "address": request.address or user.get("address"),
        }
        if request.password:
            changes["password"] = hash_password(request.password)

        return public_user(self._store.update(USERS, user_id, changes))

    def promote_to_admin(self, user_id: str) -> dict[str, Any]:
        return public_user(self._store.update(USERS, user_id, {"role": int(Role.ADMIN)}))


__all__ = [
    "AuthService",
    "InvalidToken",
    "TokenSigner",
    "USERS",
    "compare_password",
    "hash_password",
]
