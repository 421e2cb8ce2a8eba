# Services package init
"""
QuickNotes Backend — Services Layer
=====================================

What:  Business logic sitting between routes (HTTP) and the store (persistence).

Service Inventory:
    - NoteService: Title validation, store calls, not-found/error translation
    - readiness:   RetryPolicy + await_readiness() startup gate

Routes handle HTTP; services handle rules; the store handles SQL.
"""
