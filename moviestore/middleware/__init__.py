# Middleware package init
"""
Movie Store — Middleware Package
=================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → Route Handler

    Request ID runs first so the access log line and any error body carry
    the same correlation ID.
"""
