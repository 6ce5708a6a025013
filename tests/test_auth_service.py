"""
Unit Tests for AuthService
Administrator and employee login, portal check, logout and restore.
"""
import pytest

from estate_crm.models.session import Role
from estate_crm.services.auth_service import AuthService
from estate_crm.services.employee_service import EmployeeService


@pytest.fixture
def auth(store, session_repo, config):
    return AuthService(store, session_repo, config)


@pytest.fixture
def caller(store, employee_data):
    return EmployeeService(store).create(employee_data(password="secret"))


class TestLogin:
    """Tests for AuthService.login."""

    def test_admin_login(self, auth):
        """Test the fixed administrator credential."""
        result = auth.login("admin", "12345")

        assert result.authenticated
        assert result.session.role == Role.ADMIN
        assert result.session.name == "Administrator"
        assert auth.current == result.session

    def test_employee_login(self, auth, caller):
        result = auth.login(caller.id, "secret")

        assert result
        assert result.session.role == Role.EMPLOYEE
        assert result.session.id == caller.id

    def test_wrong_secret_denied(self, auth, caller):
        """Test a bad password is reported, not raised."""
        result = auth.login(caller.id, "wrong")

        assert not result.authenticated
        assert result.session is None
        assert auth.current is None

    def test_unknown_identifier_denied(self, auth):
        assert not auth.login("EMP001", "wrong")

    def test_portal_mismatch_denied(self, auth, caller, session_repo, config):
        """Test an employee cannot sign in through the admin portal."""
        result = auth.login(caller.id, "secret", portal=Role.ADMIN)

        assert not result.authenticated
        assert "admin" in result.message
        assert session_repo.get(config.SESSION_KEY) is None

    def test_admin_on_employee_portal_denied(self, auth):
        assert not auth.login("admin", "12345", portal=Role.EMPLOYEE)


class TestSessionPersistence:
    """Tests for storing and restoring the session record."""

    def test_login_persists_session(self, auth, session_repo, config):
        auth.login("admin", "12345")

        raw = session_repo.get(config.SESSION_KEY)
        assert '"role":"ADMIN"' in raw.replace(" ", "")

    def test_restore_after_restart(self, auth, store, session_repo, config, caller):
        """Test a new service instance picks up the stored session."""
        auth.login(caller.id, "secret")

        restarted = AuthService(store, session_repo, config)
        session = restarted.restore()

        assert session.id == caller.id
        assert session.role == Role.EMPLOYEE

    def test_logout_clears_storage(self, auth, session_repo, config):
        auth.login("admin", "12345")

        assert auth.logout()
        assert auth.current is None
        assert session_repo.get(config.SESSION_KEY) is None

    def test_logout_without_session(self, auth):
        assert auth.logout() is False

    def test_corrupt_record_discarded(self, auth, session_repo, config):
        session_repo.put(config.SESSION_KEY, "{not json")

        assert auth.restore() is None
        assert session_repo.get(config.SESSION_KEY) is None

    def test_without_repository(self, store, config):
        """Test the gate works with no persistence collaborator."""
        auth = AuthService(store, None, config)

        assert auth.login("admin", "12345")
        assert auth.restore() is None
