# Middleware package init
"""
Perks API — Middleware Package
===============================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first so every later log line can carry it
    2. Logging wraps the rest of the stack to capture status and duration
    3. CORS is FastAPI's CORSMiddleware (handles preflight)
"""
