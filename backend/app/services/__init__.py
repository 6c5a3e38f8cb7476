"""Services Layer — imperative shell around the booking rules.

Invariants:
    - Services do IO through protocol implementations (AdSlotStore), never raw in routes
    - Business guards come from core/, services only sequence calls

Design Decisions:
    - BookingController receives its store by injection: tests swap in in-memory stores
"""
