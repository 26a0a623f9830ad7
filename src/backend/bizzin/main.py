from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bizzin.api.router import api_router
from bizzin.core.config import get_settings
from bizzin.core.logging import configure_logging
from bizzin.services.analyzer import SentimentAnalyzer

configure_logging()
settings = get_settings()
logger = logging.getLogger(__name__)

docs_url = "/docs" if settings.enable_swagger_ui else None
redoc_url = "/redoc" if settings.enable_redoc else None


@asynccontextmanager
async def lifespan(app: FastAPI):
    analyzer = SentimentAnalyzer.from_settings(settings)
    if analyzer.remote is not None and not analyzer.remote.configured:
        logger.warning("No Hugging Face token configured; journal analysis will use the local classifier")
    app.state.analyzer = analyzer
    try:
        yield
    finally:
        await analyzer.aclose()


app = FastAPI(
    title="Bizzin Insights API",
    version="1.0.0",
    docs_url=docs_url,
    redoc_url=redoc_url,
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"Invalid {field}" if field else "Invalid request body"
    return JSONResponse(status_code=400, content={"success": False, "error": message})


app.include_router(api_router, prefix="/api")


@app.get("/healthz", tags=["health"], include_in_schema=False)
def healthz() -> dict[str, str]:
    return {"status": "ok"}
