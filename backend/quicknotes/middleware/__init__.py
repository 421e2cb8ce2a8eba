# Middleware package init
"""
QuickNotes Backend — Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the correlation
    ID; the ID is written to the response headers on the way back.
"""
