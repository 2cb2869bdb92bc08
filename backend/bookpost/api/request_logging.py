"""Request Logging Middleware: one line when a request arrives, one when the response leaves.

Invariants:
    - "Request received" carries method, url, ip
    - "Response sent" carries method, path, status, duration_ms, and is logged even
      when the handler raises (status 500)
    - ip prefers X-Forwarded-For (first hop), then X-Real-IP, then the socket peer
"""

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger("bookpost.requests")


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client:
        return request.client.host
    return "unknown"


def register_request_logging(app: FastAPI) -> None:

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        logger.info(
            "Request received",
            extra={
                "method": request.method,
                "url": str(request.url),
                "ip": client_ip(request),
            },
        )
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            logger.info(
                "Response sent",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": status,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
