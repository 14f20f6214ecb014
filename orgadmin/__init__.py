"""Org admin backend: consistency coordination and error taxonomy.

Layers follow hexagonal architecture:
- core/: Error taxonomy, validation, configuration, result types
- domain/: Entities and protocols (ports)
- infrastructure/: Keycloak, logging and database adapters
- application/: Orchestration (authenticated retry, dual-store saga)
- presentation/: HTTP error rendering (FastAPI)
"""
