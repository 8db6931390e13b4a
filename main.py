# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Reviewer Assignment Service
===========================
Assigns code reviewers to pull requests from the author's team and keeps
those assignments valid as people come and go:

    create   ─► up to two random active teammates of the author
    reassign ─► swap one reviewer for a random active teammate
    merge    ─► OPEN ─► MERGED (idempotent, terminal)
    deactivate members ─► open PRs handed round-robin to remaining teammates

Port: 8080
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.controllers import (
    pull_request_controller,
    statistics_controller,
    system_controller,
    team_controller,
    user_controller,
)
from app.core.config import settings
from app.core.database import engine, init_schema
from app.core.dependencies import get_pull_request_service
from app.core.logging import get_logger
from app.middleware import MetricsMiddleware, RequestIDMiddleware
from app.services.errors import ServiceError

logger = get_logger(settings.SERVICE_NAME)


def _error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    if settings.AUTO_MIGRATE:
        init_schema(engine)
    try:
        get_pull_request_service().seed_gauges()
    except SQLAlchemyError:
        logger.warning("Could not seed gauges — DB may not be ready yet")
    logger.info("%s v%s started", settings.SERVICE_NAME, settings.SERVICE_VERSION)
    yield
    engine.dispose()
    logger.info("Shutting down — connection pool disposed")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Reviewer Assignment Service",
    description="Assigns and rebalances pull request reviewers within teams.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.code, exc.message))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "; ".join(
        f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg', '')}" for e in errors
    ) or "invalid request"
    return JSONResponse(status_code=400, content=_error_body("INVALID_REQUEST", message))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception",
                     extra={"request_id": getattr(request.state, "request_id", None)})
    return JSONResponse(status_code=500, content=_error_body("INTERNAL_ERROR", "internal error"))


# ── Routers ───────────────────────────────────────────────────────────────
app.include_router(system_controller.router)
app.include_router(team_controller.router)
app.include_router(user_controller.router)
app.include_router(pull_request_controller.router)
app.include_router(statistics_controller.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.SERVICE_PORT)
