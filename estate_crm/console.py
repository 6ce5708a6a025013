"""
CRMConsole - the single in-process entry point presentation code talks to.
Mirrors the operations the admin and caller screens invoke.
"""
from functools import wraps
from typing import Iterable, List, Mapping, Optional, Union

from estate_crm.config import Settings, settings as default_settings
from estate_crm.core.exceptions import StoreNotInitializedError
from estate_crm.models.employee import Employee
from estate_crm.models.lead import Lead, LeadStatus
from estate_crm.models.session import Role, UserSession
from estate_crm.repositories.session_repo import SessionRepository
from estate_crm.repositories.store import EntityStore
from estate_crm.schemas.auth import LoginResult
from estate_crm.schemas.common import OperationResult
from estate_crm.schemas.employee import EmployeeCreate, EmployeePatch
from estate_crm.schemas.lead import LeadImportResponse, LeadRow
from estate_crm.services.auth_service import AuthService
from estate_crm.services.employee_service import EmployeeService
from estate_crm.services.lead_service import LeadService
from estate_crm.services.query_service import QueryService


def requires_init(func):
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        if not self.initialized:
            raise StoreNotInitializedError()
        return func(self, *args, **kwargs)
    return wrapper


class CRMConsole:
    """Facade over the entity store and its services."""

    def __init__(
        self,
        store: Optional[EntityStore] = None,
        session_repo: Optional[SessionRepository] = None,
        config: Optional[Settings] = None
    ):
        self.config = config or default_settings
        self.store = store or EntityStore(config=self.config)
        self.employees = EmployeeService(self.store)
        self.leads = LeadService(self.store)
        self.queries = QueryService(self.store)
        self.auth = AuthService(self.store, session_repo, self.config)
        self.initialized = False

    def init(self, seed_demo: Optional[bool] = None) -> "CRMConsole":
        """Prepare the store and restore any persisted session."""
        if seed_demo is None:
            seed_demo = self.config.SEED_DEMO_DATA
        if seed_demo and not self.store.employees.count():
            self.store.seed_demo()
        self.auth.restore()
        self.initialized = True
        return self

    @property
    def user(self) -> Optional[UserSession]:
        return self.auth.current

    @property
    def _actor(self) -> Optional[str]:
        return self.user.id if self.user else None

    # --- Session ---

    @requires_init
    def login(self, identifier: str, secret: str, portal: Optional[Role] = None) -> LoginResult:
        return self.auth.login(identifier, secret, portal)

    @requires_init
    def logout(self) -> bool:
        return self.auth.logout()

    # --- Employee management ---

    @requires_init
    def add_employee(self, data: Union[EmployeeCreate, dict]) -> Employee:
        if isinstance(data, dict):
            data = EmployeeCreate(**data)
        return self.employees.create(data, actor_id=self._actor)

    @requires_init
    def update_employee(self, employee_id: str, patch: Union[EmployeePatch, dict]) -> OperationResult:
        return self.employees.update(employee_id, patch, actor_id=self._actor)

    @requires_init
    def delete_employee(self, employee_id: str) -> OperationResult:
        return self.employees.delete(employee_id, actor_id=self._actor)

    @requires_init
    def toggle_employee_status(self, employee_id: str) -> OperationResult:
        return self.employees.toggle_status(employee_id, actor_id=self._actor)

    @requires_init
    def list_employees(self) -> List[Employee]:
        return self.employees.list()

    # --- Lead management ---

    @requires_init
    def add_leads(self, rows: Iterable[Union[Mapping, LeadRow]]) -> LeadImportResponse:
        return self.leads.bulk_ingest(rows, actor_id=self._actor)

    @requires_init
    def import_leads_csv(self, csv_content: str) -> LeadImportResponse:
        return self.leads.import_csv(csv_content, actor_id=self._actor)

    @requires_init
    def assign_leads(self, lead_ids: Iterable[str], employee_id: Optional[str]) -> OperationResult:
        return self.leads.assign(lead_ids, employee_id, actor_id=self._actor)

    @requires_init
    def delete_lead(self, lead_id: str) -> OperationResult:
        return self.leads.delete(lead_id, actor_id=self._actor)

    @requires_init
    def update_lead_status(self, lead_id: str, status: Union[LeadStatus, str]) -> OperationResult:
        return self.leads.update_status(lead_id, status, actor_id=self._actor)

    @requires_init
    def record_call(self, lead_id: str) -> OperationResult:
        return self.leads.record_call(lead_id, actor_id=self._actor)

    @requires_init
    def add_feedback(self, lead_id: str, text: str) -> OperationResult:
        return self.leads.add_feedback(lead_id, text, actor_id=self._actor)

    @requires_init
    def update_feedback(self, lead_id: str, feedback_id: str, new_text: str) -> OperationResult:
        return self.leads.edit_feedback(lead_id, feedback_id, new_text, actor_id=self._actor)

    @requires_init
    def delete_feedback(self, lead_id: str, feedback_id: str) -> OperationResult:
        return self.leads.delete_feedback(lead_id, feedback_id, actor_id=self._actor)

    @requires_init
    def get_lead(self, lead_id: str) -> Optional[Lead]:
        return self.leads.get(lead_id)

    @requires_init
    def list_leads(self) -> List[Lead]:
        return self.store.leads.list()

    # --- Views for the signed-in caller ---

    @requires_init
    def my_queue(self) -> List[Lead]:
        """Calling list of the signed-in employee; empty for admins."""
        if not self.user or self.user.is_admin:
            return []
        return self.queries.queue_for(self.user.id)
