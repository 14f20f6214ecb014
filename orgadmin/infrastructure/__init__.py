"""Infrastructure layer - adapters and external integrations.

Structure:
- identity/: Keycloak credential manager and error mapping
- logging/: structlog adapters
- persistence/: SQLAlchemy models and repositories
"""
