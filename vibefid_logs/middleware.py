from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import time
import uuid


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, logger):
        super().__init__(app)
        self.logger = logger

    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get("x-request-id") or str(uuid.uuid4())[:8]
        start = time.time()

        self.logger.debug("request_started",
            req_id=req_id,
            method=request.method,
            path=request.url.path,
            query=str(request.url.query) or None,
            client_ip=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent")
        )

        try:
            response = await call_next(request)
        except Exception as e:
            self.logger.error("request_failed",
                req_id=req_id,
                path=request.url.path,
                error=str(e)
            )
            raise

        duration_ms = round((time.time() - start) * 1000, 2)
        log = self.logger.warning if response.status_code >= 400 else self.logger.info
        log("request_completed",
            req_id=req_id,
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=duration_ms
        )
        response.headers["X-Request-ID"] = req_id
        return response
