"""Permission and role guards over User records. No HTTP."""

import logging

from identity_core.domain.models.enums import UserPermission, UserRole
from identity_core.domain.models.user import User
from identity_core.security.exceptions import AuthorizationError

logger = logging.getLogger(__name__)


def _names(permissions) -> str:
    return ", ".join(p.value for p in permissions)


class AuthorizationService:
    """
    Guard helpers raising AuthorizationError. Decisions come from the user's own
    rules: admins hold every permission implicitly, disabled accounts hold none.
    """

    def require_permission(self, user: User, *permissions: UserPermission) -> None:
        """Raises unless the user holds every listed permission."""
        self._require_enabled(user)
        if not user.has_all_permissions(*permissions):
            missing = [p for p in permissions if not user.has_permission(p)]
            logger.warning(
                "permission_denied",
                extra={"user_id": str(user.id), "missing": [p.value for p in missing]},
            )
            raise AuthorizationError(
                f"User {user.id} lacks required permissions: {_names(missing)}"
            )

    def require_any_permission(self, user: User, *permissions: UserPermission) -> None:
        """Raises unless the user holds at least one listed permission."""
        self._require_enabled(user)
        if not user.has_any_permission(*permissions):
            logger.warning(
                "permission_denied",
                extra={"user_id": str(user.id), "required_any": [p.value for p in permissions]},
            )
            raise AuthorizationError(
                f"User {user.id} needs one of: {_names(permissions)}"
            )

    def require_role(self, user: User, *roles: UserRole) -> None:
        self._require_enabled(user)
        if user.role not in roles:
            raise AuthorizationError(
                f"Role {user.role.value} is not one of: {', '.join(r.value for r in roles)}"
            )

    @staticmethod
    def _require_enabled(user: User) -> None:
        if not user.is_enabled:
            raise AuthorizationError(
                f"User {user.id} is not enabled (status {user.status.value})"
            )
        if user.is_locked:
            raise AuthorizationError(
                f"User {user.id} is locked until {user.account_locked_until.isoformat()}"
            )
