# Middleware package init
"""
Field Manager Backend: Middleware Package
=========================================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: assign the correlation ID first
    2. Logging: log method, path, status and duration with that ID
    3. GZip / CORS: standard Starlette middleware
"""
