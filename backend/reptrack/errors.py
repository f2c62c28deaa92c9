"""Error taxonomy shared by repositories, services and the HTTP layer."""


class TrackerError(Exception):
    """Base exception; ``status_code`` is what the HTTP boundary answers with."""
    status_code = 500


class ValidationError(TrackerError):
    """Missing identifying fields or input that cannot be coerced."""
    status_code = 400


class NotFoundError(TrackerError):
    """A record an operation requires does not exist."""
    status_code = 404


class ConflictError(TrackerError):
    """A uniqueness rule would be violated."""
    status_code = 409


class StoreError(TrackerError):
    """The database rejected or failed an operation."""
    status_code = 500


class UpstreamError(TrackerError):
    """An external service answered with an error or could not be reached."""
    status_code = 502


class CoachUnavailableError(TrackerError):
    """Coaching is not configured on this deployment."""
    status_code = 503
