"""
NoteKeep — Application Package Initializer
===========================================

A small note-taking HTTP service backed by a single JSON state file.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      NoteStore (Business Logic)     │  ← Uniqueness, ids, locking
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Pydantic records + API contract
    ├─────────────────────────────────────┤
    │      StateFile (Persistence)        │  ← Whole-document JSON load/save
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
