"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All SQLAlchemy failures leave this layer as board errors (core/errors.py)

Design Decisions:
    - SqlBoardStore is the only BoardStore implementation shipped; the engine sees
      it through the Protocol in core/repository_protocols.py
"""
