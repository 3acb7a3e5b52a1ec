# Services package init
"""
NoteKeep — Services Layer
==========================

Service Inventory:
    - StateFile: Loads/saves the JSON state document (persistence primitive)
    - NoteStore: Note CRUD with title uniqueness and id assignment, serialized by a lock
"""
