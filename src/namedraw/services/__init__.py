"""Service layer — the draw state machine returning ServiceResult.

Services may import from domain, infrastructure, and plugins.
They must never import from commands or output.
"""
