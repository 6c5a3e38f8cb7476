"""API Layer — FastAPI routes, identity dependency, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate booking to services/booking_controller.py
"""
