"""Infrastructure Layer — database session management and structured logging.

Invariants:
    - Storage failures surface as DatabaseError (core/errors.py), never raw driver exceptions
    - No booking rules here: infrastructure only moves bytes and log lines

Design Decisions:
    - Module-level db_manager singleton, set up by the FastAPI lifespan
"""
