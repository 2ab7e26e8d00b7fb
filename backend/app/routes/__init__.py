# Routes package init
"""
Daybook Backend — API Routes Package
======================================

Route Inventory:
    - notes.py:   /note   POST, GET, GET /{id}, PUT /{id}, DELETE /{id}
    - tasks.py:   /task   (same five routes)
    - events.py:  /event  (same five routes)
    - health.py:  GET /, GET /health (no authentication)

Routes are THIN: they resolve the caller's identity and a database session
through Depends(), call a service, and wrap the result in a response schema.
"""
