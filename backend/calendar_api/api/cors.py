"""CORS Layer: permissive cross-origin headers on every response.

Invariants:
    - OPTIONS on any path → 204, empty body, never reaches the router
    - Every response (200, 204, 400, 404, 500) carries the three CORS headers,
      whether or not the request sent an Origin header
    - Unexpected exceptions are converted to a 500 here, inside the middleware

Design Decisions:
    - Own middleware over fastapi.middleware.cors.CORSMiddleware: that one only
      answers requests carrying Origin and never sees responses built by
      Starlette's ServerErrorMiddleware
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import Response

from calendar_api.api.error_handlers import internal_error_response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def register_cors(app: FastAPI) -> None:
    """Install the CORS middleware on the FastAPI app."""

    @app.middleware("http")
    async def cors_middleware(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=status.HTTP_204_NO_CONTENT)
        else:
            try:
                response = await call_next(request)
            except Exception as exc:
                response = internal_error_response(request, exc)
        response.headers.update(CORS_HEADERS)
        return response
