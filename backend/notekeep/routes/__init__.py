# Routes package init
"""
NoteKeep — API Routes Package
==============================

Route Inventory:
    - notes.py:   GET /notes, GET /note/{id}, GET /note/read/{title},
                  POST /note, PUT /note/{id}, DELETE /note/{id}
    - health.py:  GET /health

Routes stay thin: they parse the request, call NoteStore, and choose the
status code. Invariants live in the store.
"""
