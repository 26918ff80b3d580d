"""Closed enumerations for user authorization and lifecycle."""

from enum import Enum


class UserRole(str, Enum):
    USER = "USER"  # Regular user with basic permissions
    ADMIN = "ADMIN"  # Tenant administrator
    SUPER_ADMIN = "SUPER_ADMIN"  # Cross-tenant system administrator
    MANAGER = "MANAGER"
    ANALYST = "ANALYST"
    DEVELOPER = "DEVELOPER"
    VIEWER = "VIEWER"


class UserStatus(str, Enum):
    """Account status. Any status may follow any other; policy lives outside the record."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"  # Temporarily disabled
    PENDING = "PENDING"  # Registered, not yet activated
    SUSPENDED = "SUSPENDED"
    DELETED = "DELETED"  # Soft-deleted
    SYSTEM = "SYSTEM"  # System account, never deletable


class UserPermission(str, Enum):
    """Fine-grained capabilities, grantable independently of role."""

    # User management
    USER_READ = "USER_READ"
    USER_WRITE = "USER_WRITE"
    USER_DELETE = "USER_DELETE"
    USER_INVITE = "USER_INVITE"

    # Eligibility atoms
    ATOM_READ = "ATOM_READ"
    ATOM_WRITE = "ATOM_WRITE"
    ATOM_DELETE = "ATOM_DELETE"
    ATOM_EXECUTE = "ATOM_EXECUTE"
    ATOM_TEST = "ATOM_TEST"

    # Moments and campaigns
    MOMENT_READ = "MOMENT_READ"
    MOMENT_WRITE = "MOMENT_WRITE"
    MOMENT_DELETE = "MOMENT_DELETE"
    MOMENT_EXECUTE = "MOMENT_EXECUTE"

    # Analytics and reporting
    ANALYTICS_READ = "ANALYTICS_READ"
    ANALYTICS_EXPORT = "ANALYTICS_EXPORT"
    ANALYTICS_ADMIN = "ANALYTICS_ADMIN"

    # System administration
    TENANT_READ = "TENANT_READ"
    TENANT_WRITE = "TENANT_WRITE"
    TENANT_DELETE = "TENANT_DELETE"
    SYSTEM_CONFIG = "SYSTEM_CONFIG"

    # API access
    API_READ = "API_READ"
    API_WRITE = "API_WRITE"
    API_ADMIN = "API_ADMIN"

    # Billing
    BILLING_READ = "BILLING_READ"
    BILLING_WRITE = "BILLING_WRITE"

    # Advanced features
    EXPERIMENT_READ = "EXPERIMENT_READ"
    EXPERIMENT_WRITE = "EXPERIMENT_WRITE"
    ML_MODEL_READ = "ML_MODEL_READ"
    ML_MODEL_WRITE = "ML_MODEL_WRITE"


ADMIN_ROLES = frozenset({UserRole.ADMIN, UserRole.SUPER_ADMIN})
