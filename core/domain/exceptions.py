"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Raised when input violates an entity's rules."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(DomainException):
    """Base exception for lookups that found nothing in the caller's organization."""


class AuthenticationError(DomainException):
    """Base exception for credential and token failures."""


class PermissionDeniedError(DomainException):
    """Raised when the caller's role does not allow an operation."""

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message, code="PERMISSION_DENIED")


# Accounts


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, code="USER_NOT_FOUND")


class OrganizationNotFoundError(NotFoundError):
    """Raised when an organization is not found."""

    def __init__(self, message: str = "Organization not found"):
        super().__init__(message, code="ORGANIZATION_NOT_FOUND")


class UserAlreadyExistsError(DomainException):
    """Raised when registering an email that is already taken."""

    def __init__(self, message: str = "User already exists"):
        super().__init__(message, code="USER_ALREADY_EXISTS")


class EmailInUseError(DomainException):
    """Raised when changing a user's email to one that is taken."""

    def __init__(self, message: str = "Email already in use"):
        super().__init__(message, code="EMAIL_IN_USE")


class InvalidManagerError(DomainException):
    """Raised when a manager assignment is not allowed."""

    def __init__(self, message: str = "Invalid manager selected"):
        super().__init__(message, code="INVALID_MANAGER")


class UserHasActiveLicensesError(DomainException):
    """Raised when deleting a user that still holds active licenses."""

    def __init__(self, message: str = "Cannot delete user with active licenses"):
        super().__init__(message, code="USER_HAS_ACTIVE_LICENSES")


class UserManagesOthersError(DomainException):
    """Raised when deleting a user that is the manager of other users."""

    def __init__(self, message: str = "Cannot delete user who manages other users"):
        super().__init__(message, code="USER_MANAGES_OTHERS")


class CannotDeleteSelfError(DomainException):
    """Raised when a user tries to delete their own account."""

    def __init__(self, message: str = "Cannot delete your own account"):
        super().__init__(message, code="CANNOT_DELETE_SELF")


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials do not match."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer or refresh token is malformed or expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, code="INVALID_TOKEN")


# Catalog


class SoftwareNotFoundError(NotFoundError):
    """Raised when a software product is not found."""

    def __init__(self, message: str = "Software not found"):
        super().__init__(message, code="SOFTWARE_NOT_FOUND")


class SoftwareInUseError(DomainException):
    """Raised when deleting software that is referenced by licenses or requests."""

    def __init__(
        self, message: str = "Cannot delete software with existing licenses or requests"
    ):
        super().__init__(message, code="SOFTWARE_IN_USE")


# Licenses


class LicenseException(DomainException):
    """Base exception for license-related errors."""


class LicenseNotFoundError(LicenseException, NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class LicenseAlreadyActiveError(LicenseException):
    """Raised when a user already holds an active license for the software."""

    def __init__(self, message: str = "You already have an active license for this software"):
        super().__init__(message, code="LICENSE_ALREADY_ACTIVE")


class LicenseNotActiveError(LicenseException):
    """Raised when an operation needs an active license."""

    def __init__(self, message: str = "License is not active"):
        super().__init__(message, code="LICENSE_NOT_ACTIVE")


class InvalidLicenseStatusError(LicenseException):
    """Raised when a license operation is invalid for the current status."""

    def __init__(self, message: str = "Invalid license status"):
        super().__init__(message, code="INVALID_LICENSE_STATUS")


# Requests


class RequestException(DomainException):
    """Base exception for access request errors."""


class RequestNotFoundError(RequestException, NotFoundError):
    """Raised when a request is missing or has already left PENDING."""

    def __init__(self, message: str = "Request not found or already processed"):
        super().__init__(message, code="REQUEST_NOT_FOUND")


class RequestAlreadyPendingError(RequestException):
    """Raised when the user already has a pending request for the software."""

    def __init__(self, message: str = "You already have a pending request for this software"):
        super().__init__(message, code="REQUEST_ALREADY_PENDING")


class InvalidRequestStatusError(RequestException):
    """Raised when a request transition is invalid for the current status."""

    def __init__(self, message: str = "Invalid request status"):
        super().__init__(message, code="INVALID_REQUEST_STATUS")
