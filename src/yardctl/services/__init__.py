"""Service layer — yard operations returning ServiceResult.

Services may import from domain.
They must never import from commands, output, or config.
"""
