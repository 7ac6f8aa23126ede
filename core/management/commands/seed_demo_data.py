"""
Django management command to create demo data for development.

Creates:
- The "Demo Company" organization (demo.com)
- An admin, a manager and two users reporting to the manager
- Twelve software products
- Five active licenses and two pending requests
"""

import logging
from decimal import Decimal

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from access_requests.domain.access_request import AccessRequest
from access_requests.infrastructure.repositories.django_access_request_repository import (
    DjangoAccessRequestRepository,
)
from catalog.domain.software import Software
from catalog.infrastructure.repositories.django_software_repository import (
    DjangoSoftwareRepository,
)
from core.domain.value_objects import BillingCycle, Priority, Role
from licenses.domain.license import License
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from organizations.application.services.password_hasher import PasswordHasher
from organizations.domain.organization import Organization
from organizations.domain.user import User
from organizations.infrastructure.models import Organization as OrganizationModel
from organizations.infrastructure.models import User as UserModel
from organizations.infrastructure.repositories.django_organization_repository import (
    DjangoOrganizationRepository,
)
from organizations.infrastructure.repositories.django_user_repository import DjangoUserRepository

logger = logging.getLogger(__name__)

DEMO_DOMAIN = "demo.com"
ADMIN_PASSWORD = "admin123"
USER_PASSWORD = "user1234"

# name, category, vendor, monthly cost, requires approval, description
SOFTWARE_DATA = [
    ("Slack", "Communication", "Slack Technologies", "8.75", False,
     "Team communication and collaboration platform"),
    ("Microsoft Office 365", "Productivity", "Microsoft", "12.50", True,
     "Complete office productivity suite"),
    ("Zoom", "Communication", "Zoom Video Communications", "14.99", False,
     "Video conferencing and online meetings"),
    ("GitHub", "Development", "GitHub Inc.", "4.00", True,
     "Code hosting and version control"),
    ("Figma", "Design", "Figma Inc.", "15.00", True,
     "Collaborative design tool"),
    ("Notion", "Productivity", "Notion Labs", "10.00", False,
     "All-in-one workspace for notes and collaboration"),
    ("Jira", "Project Management", "Atlassian", "7.75", True,
     "Project management and issue tracking"),
    ("1Password", "Security", "AgileBits", "8.00", False,
     "Password manager for teams"),
    ("Adobe Creative Cloud", "Design", "Adobe", "54.99", True,
     "Complete creative suite including Photoshop, Illustrator, etc."),
    ("Salesforce", "Sales", "Salesforce", "75.00", True,
     "Customer relationship management platform"),
    ("Grammarly", "Productivity", "Grammarly Inc.", "12.00", False,
     "Writing assistant and grammar checker"),
    ("Tableau", "Analytics", "Tableau Software", "75.00", True,
     "Data visualization and business intelligence"),
]


class Command(BaseCommand):
    """Command to create demo data."""

    help = "Create a demo organization with users, software, licenses and requests"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete an existing demo organization first",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        existing = OrganizationModel.objects.filter(domain=DEMO_DOMAIN)
        if existing.exists():
            if not options["reset"]:
                # pylint: disable=no-member
                self.stdout.write(
                    self.style.WARNING("Demo organization already exists (use --reset)")
                )
                return
            # Licenses and requests protect software, so remove them first
            for organization in existing:
                organization.requests.all().delete()
                organization.licenses.all().delete()
                organization.software.all().delete()
                UserModel.objects.filter(organization=organization).update(manager=None)
            existing.delete()
            self.stdout.write("Removed existing demo organization")

        summary = async_to_sync(self.create_demo_data)()
        self.print_summary(summary)

    async def create_demo_data(self) -> dict:
        """Create the organization and everything in it."""
        user_repo = DjangoUserRepository()
        software_repo = DjangoSoftwareRepository()
        license_repo = DjangoLicenseRepository()
        request_repo = DjangoAccessRequestRepository()

        organization = Organization.create(name="Demo Company", domain=DEMO_DOMAIN)
        admin = User.create(
            organization_id=organization.id,
            email=f"admin@{DEMO_DOMAIN}",
            password_hash=PasswordHasher.hash(ADMIN_PASSWORD),
            first_name="Admin",
            last_name="User",
            role=Role.ADMIN,
        )
        organization, admin = await DjangoOrganizationRepository().create_with_admin(
            organization, admin
        )

        user_hash = PasswordHasher.hash(USER_PASSWORD)
        manager = await user_repo.save(
            User.create(
                organization_id=organization.id,
                email=f"manager@{DEMO_DOMAIN}",
                password_hash=user_hash,
                first_name="Manager",
                last_name="User",
                role=Role.MANAGER,
            )
        )
        john = await user_repo.save(
            User.create(
                organization_id=organization.id,
                email=f"john@{DEMO_DOMAIN}",
                password_hash=user_hash,
                first_name="John",
                last_name="Doe",
                manager_id=manager.id,
            )
        )
        jane = await user_repo.save(
            User.create(
                organization_id=organization.id,
                email=f"jane@{DEMO_DOMAIN}",
                password_hash=user_hash,
                first_name="Jane",
                last_name="Smith",
                manager_id=manager.id,
            )
        )

        software = []
        for name, category, vendor, cost, requires_approval, description in SOFTWARE_DATA:
            product = Software.create(
                organization_id=organization.id,
                name=name,
                category=category,
                description=description,
                vendor=vendor,
                cost_per_license=Decimal(cost),
                billing_cycle=BillingCycle.MONTHLY,
                requires_approval=requires_approval,
            )
            software.append(await software_repo.save(product))

        slack, office, zoom, github, figma = software[:5]
        holdings = [(admin, slack), (admin, office), (john, slack), (john, zoom), (jane, slack)]
        for holder, product in holdings:
            await license_repo.save(
                License.create(
                    organization_id=organization.id,
                    user_id=holder.id,
                    software_id=product.id,
                )
            )

        await request_repo.create(
            AccessRequest.create(
                organization_id=organization.id,
                user_id=john.id,
                software_id=github.id,
                justification="Need access to company repositories for development work",
                priority=Priority.HIGH,
            )
        )
        await request_repo.create(
            AccessRequest.create(
                organization_id=organization.id,
                user_id=jane.id,
                software_id=figma.id,
                justification="Required for designing new marketing materials",
                priority=Priority.MEDIUM,
            )
        )

        logger.info("Demo data created", extra={"organization_id": str(organization.id)})
        return {
            "organization": organization,
            "users": [admin, manager, john, jane],
            "software": len(software),
            "licenses": len(holdings),
            "requests": 2,
        }

    def print_summary(self, summary: dict):
        """Print what was created and the demo credentials."""
        # pylint: disable=no-member
        self.stdout.write(
            self.style.SUCCESS(f"Created organization: {summary['organization'].name}")
        )
        self.stdout.write(
            f"Created {len(summary['users'])} users, {summary['software']} software items, "
            f"{summary['licenses']} licenses and {summary['requests']} pending requests"
        )
        self.stdout.write("\nDemo credentials:")
        for user in summary["users"]:
            password = ADMIN_PASSWORD if user.role == Role.ADMIN else USER_PASSWORD
            self.stdout.write(f"  {user.role.value:<8} {user.email} / {password}")
