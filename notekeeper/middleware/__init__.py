"""
Notekeeper Backend - Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line and any error response
    carry the same id.
"""
