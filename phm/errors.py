# PHM/backend/phm/errors.py

class PHMError(Exception):
    """Base class for errors that map to an HTTP response"""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(PHMError):
    status_code = 400


class NotFound(PHMError):
    status_code = 404


class Conflict(PHMError):
    status_code = 409


class InsufficientCapacity(PHMError):
    """Requested quantity is larger than what the storage has left"""

    status_code = 400

    def __init__(self, requested: float, available: float):
        super().__init__("Not enough storage capacity available")
        self.requested = requested
        self.available = available


class VehicleUnavailable(PHMError):
    status_code = 400

    def __init__(self, availability: str):
        super().__init__("Transport provider is not available")
        self.availability = availability


class InvalidTransition(PHMError):
    status_code = 409

    def __init__(self, current, target):
        super().__init__(f"Cannot move booking from {current.value} to {target.value}")
        self.current = current
        self.target = target


class Unauthorized(PHMError):
    status_code = 401


class Forbidden(PHMError):
    status_code = 403


class InternalError(PHMError):
    """Any unexpected failure; the client only gets a generic message"""

    status_code = 500
