"""API Layer: FastAPI routers, auth dependency, error handlers, request logging.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; errors use the BookPostError envelope

Design Decisions:
    - Thin routes delegate to services/
"""
