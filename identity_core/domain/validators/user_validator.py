"""Validators for user domain rules. Pure functions, no infrastructure or DB access."""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from email_validator import EmailNotValidError, validate_email

from identity_core.domain.exceptions import FieldViolation, InvalidTenantError, UserValidationError

if TYPE_CHECKING:
    from identity_core.domain.models.record import RecordEnvelope
    from identity_core.domain.models.user import User

# Column limits (mirrored by the ORM mapping)
TENANT_ID_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
PASSWORD_HASH_LENGTH = 60  # bcrypt
NAME_MAX_LENGTH = 100
EXTERNAL_ID_MAX_LENGTH = 255
DISPLAY_NAME_MAX_LENGTH = 255
AVATAR_URL_MAX_LENGTH = 500
PHONE_MAX_LENGTH = 20
TIMEZONE_MAX_LENGTH = 50
LOCALE_MAX_LENGTH = 10
IP_MAX_LENGTH = 45  # IPv6 textual form
TOKEN_MAX_LENGTH = 255
ACTOR_MAX_LENGTH = 100


def validate_tenant_id(tenant_id: Optional[str]) -> None:
    """Enforce tenant constraint: must not be empty. Raises InvalidTenantError if invalid."""
    if not tenant_id or not tenant_id.strip():
        raise InvalidTenantError("tenant_id must not be empty")


def _required(errors: List[FieldViolation], field: str, value: Optional[str], max_length: int) -> None:
    if value is None or not value.strip():
        errors.append(FieldViolation(field, "is required"))
    elif len(value) > max_length:
        errors.append(FieldViolation(field, f"must not exceed {max_length} characters"))


def _optional(errors: List[FieldViolation], field: str, value: Optional[str], max_length: int) -> None:
    if value is not None and len(value) > max_length:
        errors.append(FieldViolation(field, f"must not exceed {max_length} characters"))


def _aware(errors: List[FieldViolation], field: str, value: Optional[datetime]) -> None:
    if value is not None and value.tzinfo is None:
        errors.append(FieldViolation(field, "must be timezone-aware"))


def record_violations(record: "RecordEnvelope") -> List[FieldViolation]:
    """Envelope rules: tenant tag, soft-delete consistency, audit ordering and counters."""
    errors: List[FieldViolation] = []
    _required(errors, "tenant_id", record.tenant_id, TENANT_ID_MAX_LENGTH)
    _optional(errors, "created_by", record.created_by, ACTOR_MAX_LENGTH)
    _optional(errors, "last_modified_by", record.last_modified_by, ACTOR_MAX_LENGTH)
    _optional(errors, "deleted_by", record.deleted_by, ACTOR_MAX_LENGTH)
    if record.deleted != (record.deleted_at is not None):
        errors.append(FieldViolation("deleted_at", "must be set if and only if the record is deleted"))
    for name in ("created_at", "updated_at", "deleted_at"):
        _aware(errors, name, getattr(record, name))
    if (
        record.created_at.tzinfo is not None
        and record.updated_at.tzinfo is not None
        and record.updated_at < record.created_at
    ):
        errors.append(FieldViolation("updated_at", "must not precede created_at"))
    if record.version < 0:
        errors.append(FieldViolation("version", "must not be negative"))
    return errors


def user_violations(user: "User") -> List[FieldViolation]:
    """Every violated rule on the user, envelope included."""
    errors = record_violations(user.record)

    _required(errors, "email", user.email, EMAIL_MAX_LENGTH)
    if user.email and user.email.strip() and len(user.email) <= EMAIL_MAX_LENGTH:
        try:
            validate_email(user.email, check_deliverability=False)
        except EmailNotValidError as e:
            errors.append(FieldViolation("email", f"must be a valid address ({e})"))

    if not user.password_hash or not user.password_hash.strip():
        errors.append(FieldViolation("password_hash", "is required"))
    elif len(user.password_hash) != PASSWORD_HASH_LENGTH:
        errors.append(FieldViolation("password_hash", f"must be {PASSWORD_HASH_LENGTH} characters"))

    _required(errors, "first_name", user.first_name, NAME_MAX_LENGTH)
    _required(errors, "last_name", user.last_name, NAME_MAX_LENGTH)
    _optional(errors, "external_id", user.external_id, EXTERNAL_ID_MAX_LENGTH)
    _optional(errors, "display_name", user.display_name, DISPLAY_NAME_MAX_LENGTH)
    _optional(errors, "avatar_url", user.avatar_url, AVATAR_URL_MAX_LENGTH)
    _optional(errors, "phone", user.phone, PHONE_MAX_LENGTH)
    _optional(errors, "timezone", user.timezone, TIMEZONE_MAX_LENGTH)
    _optional(errors, "locale", user.locale, LOCALE_MAX_LENGTH)
    _optional(errors, "last_login_ip", user.last_login_ip, IP_MAX_LENGTH)
    _optional(errors, "password_reset_token", user.password_reset_token, TOKEN_MAX_LENGTH)
    _optional(errors, "email_verification_token", user.email_verification_token, TOKEN_MAX_LENGTH)

    if user.login_count < 0:
        errors.append(FieldViolation("login_count", "must not be negative"))
    if user.failed_login_attempts < 0:
        errors.append(FieldViolation("failed_login_attempts", "must not be negative"))

    for name in (
        "password_reset_expires_at",
        "email_verified_at",
        "last_login_at",
        "account_locked_until",
    ):
        _aware(errors, name, getattr(user, name))
    return errors


def validate_user(user: "User") -> None:
    """Raises UserValidationError carrying every violation; returns None when the user is valid."""
    errors = user_violations(user)
    if errors:
        raise UserValidationError(errors)
