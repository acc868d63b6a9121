"""threadboard — capacity-bounded discussion board backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
