"""Database models."""

from .appointment import Appointment, AppointmentCreate, AppointmentUpdate
from .lead import CLOSED_LEAD_STATUSES, Lead, LeadCreate, LeadStatus, LeadUpdate
from .task import TASK_DONE, Task, TaskCreate, TaskPriority, TaskUpdate

__all__ = [
    "Appointment",
    "AppointmentCreate",
    "AppointmentUpdate",
    "CLOSED_LEAD_STATUSES",
    "Lead",
    "LeadCreate",
    "LeadStatus",
    "LeadUpdate",
    "TASK_DONE",
    "Task",
    "TaskCreate",
    "TaskPriority",
    "TaskUpdate",
]
