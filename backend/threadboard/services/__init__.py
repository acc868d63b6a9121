"""Services Layer — the consistency engine.

Invariants:
    - Services reach persistence only through core/repository_protocols.BoardStore
    - Every mutating sequence runs inside one store transaction

Design Decisions:
    - One engine per request: correctness comes from the store's row locks, not from
      shared in-process state
"""
