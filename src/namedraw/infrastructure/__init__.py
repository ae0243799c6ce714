"""Infrastructure layer — state database, scheduler, random source.

This layer depends on stdlib and third-party libs (SQLAlchemy).
It must never import from services, commands, or output.
"""
