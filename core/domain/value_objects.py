"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import re
import uuid
from abc import ABC
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or not EMAIL_PATTERN.match(self.value):
            raise ValueError(f"Invalid email address: {self.value}")
        if self.value != self.value.lower():
            raise ValueError("Email must be lower case")

    @classmethod
    def normalize(cls, raw: str) -> "Email":
        """Build an Email from user input (trimmed and lower-cased)."""
        return cls((raw or "").strip().lower())

    @property
    def domain(self) -> str:
        """Part of the address after the @."""
        return self.value.split("@", 1)[1]

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


class Role(Enum):
    """User role within an organization."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    USER = "USER"

    @property
    def can_approve(self) -> bool:
        """ADMIN and MANAGER may decide requests and manage users."""
        return self in (Role.ADMIN, Role.MANAGER)

    def __str__(self) -> str:
        """Return role as string."""
        return self.value


class BillingCycle(Enum):
    """How often a software license is billed."""

    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"
    ONE_TIME = "ONE_TIME"

    @property
    def monthly_multiplier(self) -> Decimal:
        """Factor that converts one billing period into a monthly cost."""
        if self == BillingCycle.MONTHLY:
            return Decimal(1)
        if self == BillingCycle.YEARLY:
            return Decimal(1) / Decimal(12)
        return Decimal(0)

    def __str__(self) -> str:
        """Return billing cycle as string."""
        return self.value


class LicenseStatus(Enum):
    """License status value object."""

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    EXPIRED = "EXPIRED"
    REVOKED = "REVOKED"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class RequestStatus(Enum):
    """Access request status. Only PENDING is non-terminal."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        """Whether the request has left PENDING."""
        return self != RequestStatus.PENDING

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class Priority(Enum):
    """Access request priority."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @property
    def rank(self) -> int:
        """Sort rank, most urgent first."""
        return _PRIORITY_RANK[self]

    def __str__(self) -> str:
        """Return priority as string."""
        return self.value


_PRIORITY_RANK = {
    Priority.URGENT: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class ApprovalDecision(Enum):
    """Outcome recorded on an Approval."""

    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    def __str__(self) -> str:
        """Return decision as string."""
        return self.value


@dataclass(frozen=True)
class Principal(ValueObject):
    """The authenticated caller of an operation."""

    user_id: uuid.UUID
    email: str
    organization_id: uuid.UUID
    role: Role

    @property
    def is_admin(self) -> bool:
        """Whether the caller is an organization admin."""
        return self.role == Role.ADMIN

    @property
    def can_approve(self) -> bool:
        """Whether the caller may decide requests."""
        return self.role.can_approve
