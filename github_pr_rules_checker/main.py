"""Main FastAPI application for GitHub PR Rules Checker."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from github_pr_rules_checker import __version__
from github_pr_rules_checker.api.routes import router as api_router
from github_pr_rules_checker.config import get_settings
from github_pr_rules_checker.utils import get_logger

logger = get_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan events."""
    logger.info("Starting GitHub PR Rules Checker API")
    logger.info("Using rule file %s", settings.rules_file)

    yield

    logger.info("Shutting down GitHub PR Rules Checker API")


app = FastAPI(
    title="GitHub PR Rules Checker",
    description="Checks pull requests against team conventions and reports advisory findings",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": __version__,
    }


@app.exception_handler(HTTPException)
async def http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
    """HTTP exception handler."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )


def run_server(host: str | None = None, port: int | None = None) -> None:
    """Run the API with uvicorn."""
    uvicorn.run(
        "github_pr_rules_checker.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run_server()
