"""
Notekeeper Backend - API Routes Package
=========================================

Route Inventory:
    - auth.py:    POST /api/register, POST /api/login
    - notes.py:   GET/POST /api/notes, PUT/DELETE /api/notes/{id}  (bearer token)
    - health.py:  GET  /health

Routes stay thin: they pull data out of the request, call a service, and
pick the status code. Errors travel as exceptions to the handlers in main.py.
"""
