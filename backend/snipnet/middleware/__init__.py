"""
Snipnet Backend — Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

The order is reversed for responses, so the request id is already set when
the access log line is written.
"""
