"""
User DTOs that embed license information.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from licenses.application.dto.license_dto import LicenseDTO
from organizations.application.dto.user_dto import UserDTO, UserSummaryDTO


@dataclass
class UserDetailDTO(UserDTO):
    """
    A user as shown in user administration.

    ``counts`` holds ``active_licenses`` and ``managed_users``.
    """

    manager: Optional[UserSummaryDTO] = None
    licenses: List[LicenseDTO] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)


@dataclass
class CurrentUserDTO(UserDTO):
    """The caller with their organization and every license they hold or held."""

    licenses: List[LicenseDTO] = field(default_factory=list)
