"""
Notekeeper Backend - Stores
=============================

What:  Thin persistence wrappers over an AsyncSession, one per record type.
How:   Each store exposes document-store style primitives (find_one, find,
       insert, find_one_and_update, find_one_and_delete) built on single
       SQL statements.

Store Inventory:
    - UserStore: credential records, unique by email
    - NoteStore: note records, every query and mutation filtered by owner

Mutations never read-then-write: an update or delete targeting
"id AND owner" is one UPDATE/DELETE ... RETURNING statement, so it either
matches one row atomically or matches none.
"""

from notekeeper.stores.notes import NoteStore
from notekeeper.stores.users import UserStore

__all__ = ["NoteStore", "UserStore"]
