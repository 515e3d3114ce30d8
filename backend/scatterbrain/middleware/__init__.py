# Middleware package init
"""
ScatterBrain Backend - Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Access Logging] → Route Handler

    Request ID runs first so the access log line and every error response
    carry the same correlation id. On the way out, Access Logging sees the
    final status code and duration.
"""
