"""
Notekeeper Backend - Services Layer
=====================================

What:  Business logic sitting between routes (HTTP) and stores (persistence).
How:   Services receive their stores and configuration through their
       constructors; notekeeper/deps.py builds them per request.

Service Inventory:
    - Authenticator: register, login, and session token verification
    - NoteService:   ownership-scoped note create/list/update/delete
"""

from notekeeper.services.auth_service import Authenticator
from notekeeper.services.note_service import NoteService

__all__ = ["Authenticator", "NoteService"]
