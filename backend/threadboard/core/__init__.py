"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Admission checks and state transitions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the engine in services/ runs
      the store round-trips around these pure decisions
"""
