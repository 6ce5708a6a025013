"""
Authentication service - login, logout and session restore.
The session decides which operations the presentation layer offers;
lifecycle services do not re-check it.
"""
import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from estate_crm.config import Settings, settings as default_settings
from estate_crm.core.exceptions import UnauthorizedError
from estate_crm.core.security import verify_secret
from estate_crm.models.activity import Actions
from estate_crm.models.session import Role, UserSession
from estate_crm.repositories.session_repo import SessionRepository
from estate_crm.repositories.store import EntityStore
from estate_crm.schemas.auth import LoginResult

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(
        self,
        store: EntityStore,
        session_repo: Optional[SessionRepository] = None,
        config: Optional[Settings] = None
    ):
        self.store = store
        self.employee_repo = store.employees
        self.activity_repo = store.activity
        self.session_repo = session_repo
        self.config = config or default_settings
        self._session: Optional[UserSession] = None

    @property
    def current(self) -> Optional[UserSession]:
        return self._session

    def _authenticate(self, identifier: str, secret: str) -> Optional[UserSession]:
        """Administrator first, then the employee directory. First match wins."""
        if identifier == self.config.ADMIN_USERNAME and verify_secret(secret, self.config.ADMIN_PASSWORD):
            return UserSession(
                id=self.config.ADMIN_USERNAME,
                name=self.config.ADMIN_DISPLAY_NAME,
                role=Role.ADMIN
            )

        employee = self.employee_repo.get(identifier)
        if employee and verify_secret(secret, employee.password):
            return UserSession(id=employee.id, name=employee.name, role=Role.EMPLOYEE)

        return None

    def login(self, identifier: str, secret: str, portal: Optional[Role] = None) -> LoginResult:
        """
        Authenticate a principal.

        `portal` is the login tab the user picked; a valid credential for the
        other role is still refused and no session is stored.
        """
        session = self._authenticate(identifier, secret)
        if session is None:
            logger.warning(f"Failed login for '{identifier}'")
            return LoginResult(authenticated=False, message=UnauthorizedError().message)

        if portal is not None and session.role != portal:
            logger.warning(f"Login for '{identifier}' refused on the {portal.value} portal")
            message = "Access denied: you are not an admin" if portal == Role.ADMIN \
                else "Access denied: please use the admin login"
            return LoginResult(authenticated=False, message=UnauthorizedError(message).message)

        self._session = session
        if self.session_repo is not None:
            self.session_repo.put(self.config.SESSION_KEY, session.model_dump_json())

        logger.info(f"{session.role.value} '{session.id}' logged in")
        self.activity_repo.log(
            actor_id=session.id,
            action=Actions.USER_LOGGED_IN,
            entity_type="session",
            entity_id=session.id,
            meta_data={"role": session.role.value}
        )
        return LoginResult(authenticated=True, session=session)

    def logout(self) -> bool:
        """Clear the session in memory and in storage."""
        session = self._session
        self._session = None
        if self.session_repo is not None:
            self.session_repo.delete(self.config.SESSION_KEY)

        if session is None:
            return False

        self.activity_repo.log(
            actor_id=session.id,
            action=Actions.USER_LOGGED_OUT,
            entity_type="session",
            entity_id=session.id
        )
        return True

    def restore(self) -> Optional[UserSession]:
        """Reload the session persisted by a previous run, if any."""
        if self.session_repo is None:
            return None

        raw = self.session_repo.get(self.config.SESSION_KEY)
        if raw is None:
            return None

        try:
            self._session = UserSession.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.error(f"Discarding corrupt session record: {e}")
            self.session_repo.delete(self.config.SESSION_KEY)
            self._session = None

        return self._session
