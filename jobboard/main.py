import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobboard.config import settings
from jobboard.core.errors import JobBoardError
from jobboard.core.rate_limiter import rate_limiter
from jobboard.database import init_db, engine
from jobboard.logging_config import setup_logging
from jobboard.routers import admin, auth, candidates, employer, employer_jobs, job_seeker, jobs

setup_logging()
logger = logging.getLogger(__name__)

PLACEHOLDER_SECRET_KEY = "replace-with-a-long-random-secret-key"
RATE_LIMITED_PATHS = {"/auth/login", "/auth/signup"}

app = FastAPI(
    title="Job Board API",
    description="Employers post jobs and track applicants; job seekers search, save and apply.",
    version="1.0.0",
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(employer.router)
app.include_router(employer_jobs.router)
app.include_router(candidates.router)
app.include_router(jobs.router)
app.include_router(job_seeker.router)
app.include_router(admin.router)


def error_body(message: str, validation_errors: list[dict] | None = None) -> dict:
    body = {"success": False, "error": message}
    if validation_errors:
        body["validation_errors"] = validation_errors
    return body


def _field_path(loc) -> str:
    # Drop the "body"/"query" prefix FastAPI puts on every location.
    parts = [str(p) for p in loc]
    if parts and parts[0] in ("body", "query", "path"):
        parts = parts[1:]
    return ".".join(parts)


def _clean_message(msg: str) -> str:
    return msg.removeprefix("Value error, ")


@app.exception_handler(JobBoardError)
async def job_board_error_handler(request, exc: JobBoardError):
    logger.info("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    errors = [
        {"field": _field_path(err.get("loc", ())), "message": _clean_message(err.get("msg", ""))}
        for err in exc.errors()
    ]
    logger.info("Validation failed on %s %s: %d errors", request.method, request.url.path, len(errors))
    return JSONResponse(status_code=422, content=error_body("Invalid input.", errors))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content=error_body("Internal server error"))


@app.middleware("http")
async def apply_rate_limits(request, call_next):
    path = request.url.path
    if request.method == "OPTIONS" or path not in RATE_LIMITED_PATHS:
        return await call_next(request)

    limit = settings.rate_limit_auth_per_min
    if limit > 0:
        client_ip = request.client.host if request.client else "unknown"
        allowed, retry_after = rate_limiter.allow(f"{client_ip}:{path}", limit=limit, window_seconds=60)
        if not allowed:
            return JSONResponse(
                status_code=429,
                content=error_body("Too many requests. Please retry shortly."),
                headers={"Retry-After": str(retry_after)},
            )

    return await call_next(request)


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


def check_deployment_settings() -> None:
    """Refuse placeholder secrets in production; warn about them elsewhere."""
    env = (settings.app_env or "development").lower()
    placeholder_secret = settings.secret_key == PLACEHOLDER_SECRET_KEY
    placeholder_db = "username:password@" in settings.database_url
    if env in {"production", "prod"}:
        if placeholder_secret:
            raise RuntimeError("SECRET_KEY placeholder is not allowed in production")
        if placeholder_db:
            raise RuntimeError("DATABASE_URL placeholder credentials are not allowed in production")
        return
    if placeholder_secret:
        logger.warning("SECRET_KEY is using placeholder default. Set SECRET_KEY in .env for secure deployments.")
    if placeholder_db:
        logger.warning("DATABASE_URL appears to use placeholder credentials. Set DATABASE_URL in .env.")


@app.on_event("startup")
def on_startup():
    logger.info("Starting Job Board API")
    check_deployment_settings()
    init_db()


@app.get("/")
def root():
    return {"message": "Job Board API. See /docs for the endpoint reference."}
