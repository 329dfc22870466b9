"""
Custom exceptions for tenant (business) management.
"""


class TenantError(Exception):
    """Base exception for tenant-related errors."""
    status_code = 400
    code = "tenant_error"


class NoBusinessError(TenantError):
    """Raised when the caller is not associated with any business."""
    status_code = 404
    code = "no_business"

    def __init__(self, user=None, message=None):
        self.user = user
        if message is None:
            message = "No business associated with this user"
        super().__init__(message)


class RegistrationError(TenantError):
    """Base exception for business registration failures."""
    code = "registration_failed"


class RegistrationValidationError(RegistrationError):
    """Raised when a registration payload is incomplete or malformed."""
    status_code = 400
    code = "validation_failed"

    def __init__(self, message, field=None):
        self.field = field
        super().__init__(message)


class DuplicateRegistrationError(RegistrationError):
    """Raised when an account already exists for the registration email."""
    status_code = 409
    code = "conflict"

    def __init__(self, email, message=None):
        self.email = email
        if message is None:
            message = (
                "An account with this email already exists. "
                "Please login or use a different email."
            )
        super().__init__(message)
