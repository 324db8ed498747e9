"""
Failure taxonomy shared by the classifier, router, scheduler and store.

Every error carries a machine-readable ``code`` so the HTTP layer can map it
to a status without importing the component that raised it.
"""


class ResponseCoreError(Exception):
    code = "response_core_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class ValidationError(ResponseCoreError):
    """Malformed or out-of-range input, rejected before any network or store call."""
    code = "validation_error"


class InvalidCoordinate(ValidationError):
    def __init__(self, reason: str, raw=None):
        super().__init__(f"Invalid coordinate ({reason}): {raw!r}")
        self.reason = reason
        self.raw = raw


class InvalidTimestamp(ValidationError):
    def __init__(self, raw=None):
        super().__init__(f"Invalid timestamp: {raw!r}")
        self.raw = raw


class InvalidDestination(ValidationError):
    def __init__(self, reason: str, raw=None):
        super().__init__(f"Invalid destination ({reason}): {raw!r}")
        self.reason = reason
        self.raw = raw


class NetworkError(ResponseCoreError):
    """Routing service unreachable or timed out."""
    code = "network_error"


class RouteUnavailable(ResponseCoreError):
    """Routing service answered but produced no usable route."""
    code = "route_unavailable"


class StateConflict(ResponseCoreError):
    """Operation is invalid for the incident's current status."""
    code = "state_conflict"


class PersistenceError(ResponseCoreError):
    code = "persistence_error"


class IncidentNotFound(ResponseCoreError):
    code = "not_found"

    def __init__(self, incident_id):
        super().__init__(f"Incident not found: {incident_id}")
        self.incident_id = incident_id
