"""BookPost Application Package: book rental store and social posting API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
