"""
Builds license DTOs with their related software and holders.
"""
from typing import Iterable, List, Optional

from catalog.application.dto.software_dto import SoftwareDTO
from catalog.ports.software_repository import SoftwareRepository
from licenses.application.dto.license_dto import LicenseDTO
from licenses.domain.license import License
from organizations.application.dto.user_dto import UserSummaryDTO
from organizations.ports.user_repository import UserRepository


class LicenseAssembler:
    """Batch-loads what license DTOs embed, one query per related table."""

    def __init__(
        self,
        software_repository: SoftwareRepository,
        user_repository: Optional[UserRepository] = None,
    ):
        self.software_repository = software_repository
        self.user_repository = user_repository

    async def assemble(
        self, licenses: Iterable[License], include_user: bool = False
    ) -> List[LicenseDTO]:
        """
        Convert licenses to DTOs.

        Args:
            licenses: License entities
            include_user: Embed the holder's summary (needs a user repository)

        Returns:
            LicenseDTOs in the order given
        """
        licenses = list(licenses)
        software = await self.software_repository.find_by_ids(
            {license.software_id for license in licenses}
        )
        users = {}
        if include_user and self.user_repository is not None:
            users = await self.user_repository.find_by_ids(
                {license.user_id for license in licenses}
            )

        result = []
        for license in licenses:
            product = software.get(license.software_id)
            holder = users.get(license.user_id)
            result.append(
                LicenseDTO.from_entity(
                    license,
                    software=SoftwareDTO.from_entity(product) if product else None,
                    user=UserSummaryDTO.from_entity(holder) if holder else None,
                )
            )
        return result

    async def assemble_one(self, license: License, include_user: bool = False) -> LicenseDTO:
        return (await self.assemble([license], include_user=include_user))[0]
