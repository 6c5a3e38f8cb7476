"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Booking logic never lives in a route (delegate to BookingController)

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
