"""Services Layer: async use-case orchestration over the ORM.

Invariants:
    - Each public method commits at most once (one transaction per request)
    - Services raise BookPostError subclasses; routes never build error responses

Design Decisions:
    - One service class per resource group, constructed per request with its AsyncSession
"""
