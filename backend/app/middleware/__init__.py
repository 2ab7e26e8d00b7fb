# Middleware package init
"""
Daybook Backend — Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so every later log line can carry it
    2. Logging measures the full handling time and sees the final status
    3. GZip and CORS are Starlette's own middleware
"""
