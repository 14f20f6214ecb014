"""Database models."""

from orgadmin.infrastructure.persistence.models.org_admin_user import OrgAdminUser

__all__ = ["OrgAdminUser"]
