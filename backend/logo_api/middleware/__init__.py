# Middleware package init
"""
Logo Designer Backend — Middleware Package
============================================

Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Rate Limit] → [Request ID] → [Localization] → [Logging]
            → [GZip] → [CORS] → Route Handler

    1. Rate Limit rejects abusive clients before any other work
    2. Request ID tags the request for every later log line
    3. Localization fixes the response language
    4. Logging records status and duration with both of the above
"""
