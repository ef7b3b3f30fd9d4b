# Routes package init
"""
Movie Store — API Routes Package
=================================

Route Inventory:
    - movies.py:  GET/POST /movies, GET/PUT/DELETE /movies/{id}
    - health.py:  GET /health (service health check)

Design Principle:
    Routes are THIN: extract the path id and body, call MovieService,
    shape the response. Rules live in the service.
"""
