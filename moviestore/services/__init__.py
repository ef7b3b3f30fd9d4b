# Services package init
"""
Movie Store — Services Layer
=============================

What:  Business logic layer sitting between routes (HTTP) and the store.
Why:   Routes handle HTTP, services handle rules.

Service Inventory:
    - MovieService: id generation, best-effort body decoding, not-found policy
"""
