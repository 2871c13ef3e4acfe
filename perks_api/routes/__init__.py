# Routes package init
"""
Perks API — API Routes Package
===============================

Route Inventory:
    - perks.py:   /api/perks CRUD and exact-title filter
    - health.py:  GET /health (service health check)

Routes are THIN: they read the request, call PerkService and shape the
response. Business rules live in the services.
"""
