from enum import Enum


class IncidentStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    RESOLVED = "resolved"


NON_TERMINAL_STATUSES = (IncidentStatus.PENDING, IncidentStatus.ACTIVE)


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TriggerType(str, Enum):
    RESPONSE_STARTED = "response_started"
    ETA_REMINDER = "eta_reminder"
    SCHEDULED_RESPONSE = "scheduled_response"
    INCIDENT_RESOLVED = "incident_resolved"
    UPDATE = "update"
