"""FastAPI entrypoint for the financial report generator."""
from __future__ import annotations

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes.reports import router as reports_router
from app.core.logging_config import REQUEST_ID_HEADER, bind_request_id, configure_logging
from app.core.settings import get_settings


settings = get_settings()
configure_logging(settings)

app = FastAPI(title="Financial Report Generator API", version="1.0.0")
app.include_router(reports_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    with bind_request_id(str(uuid4())) as request_id:
        response = await call_next(request)

    response.headers[REQUEST_ID_HEADER] = request_id
    return response


@app.exception_handler(StarletteHTTPException)
async def plain_text_http_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Error bodies are plain text reasons rather than JSON envelopes."""
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    """Liveness message."""
    return "Financial Report Generator API is running!"


@app.get("/health")
def healthcheck() -> dict[str, str]:
    """Simple health endpoint."""
    return {"status": "ok"}
