# Routes package init
"""
QuickNotes Backend — API Routes Package
=========================================

What:  HTTP route handlers. All are mounted under API_PREFIX (default /api).

Route Inventory:
    - notes.py:   GET/POST /notes, GET/PUT/DELETE /notes/{id}
    - health.py:  GET /health

Routes stay thin: extract input, call the service, return the schema.
"""
