"""Domain layer - entities and protocols (ports).

The domain layer has NO dependencies on any framework or infrastructure.

Structure:
- entities/: Domain entities (org admin users)
- protocols/: Ports implemented by infrastructure adapters
"""
