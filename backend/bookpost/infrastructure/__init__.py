"""Infrastructure Layer: database sessions, logging, outbound HTTP clients.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Outbound failures mapped to ExternalServiceError (core/errors.py)
"""
