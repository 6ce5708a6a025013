# Models package - in-memory entities and the persisted session record
from estate_crm.models.employee import Employee, EmployeeStatus, Designation
from estate_crm.models.lead import Lead, LeadStatus, Feedback, MAX_FEEDBACKS
from estate_crm.models.session import UserSession, Role, SessionRecord
from estate_crm.models.activity import ActivityLog, Actions
