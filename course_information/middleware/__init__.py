# Middleware package init
"""
Course Information Service — Middleware Package
=================================================

Middleware Chain (outermost first):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Rate limit rejects abusive clients before any lookup runs
    - Request ID sets the correlation id the access log and error bodies use
    - Logging records method, path, status and duration for each request
"""
