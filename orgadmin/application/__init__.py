"""Application layer - orchestration.

Coordinates identity-service calls and local persistence. Contains no
business rules; errors are produced by the core taxonomy and the
identity error mapper.
"""
