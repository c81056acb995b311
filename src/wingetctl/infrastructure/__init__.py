"""Infrastructure layer — filesystem, operation log, package-manager process.

This layer depends on stdlib, the domain layer, and config models.
It must never import from services, commands, or output.
The service layer composes infrastructure into user-facing operations.
"""
