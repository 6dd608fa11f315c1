# Middleware package init
"""
ITR API: Middleware Package
===========================

Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: assigns the correlation ID used by every log line
    2. Logging: records method, path, status and duration with that ID
    3. CORS: FastAPI's CORSMiddleware (answers preflight requests)

    Responses pass back through the chain in reverse, so the X-Request-ID
    header and the access-log entry include the final status code.
"""
