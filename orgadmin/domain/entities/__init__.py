"""Domain entities."""

from orgadmin.domain.entities.org_admin_user import OrgAdminUser

__all__ = ["OrgAdminUser"]
