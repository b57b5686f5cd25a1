import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from . import config
from .database import build_engine, build_session_factory, init_schema
from .errors import DuplicateIdentifier, InvalidSort, SampleNotFound, StorageFailure
from .repository import SampleRepository
from .router import build_router
from .schemas import HealthOut
from .service import SampleService, utc_now

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("sampleapi").setLevel(level)


def _field_name(loc) -> str:
    if not loc:
        return "request"
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or str(loc[0])


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, str] = {}
    for err in exc.errors():
        errors.setdefault(_field_name(err.get("loc", ())), err.get("msg", "invalid value"))
    logger.info("Validation failed %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


async def invalid_sort_handler(request: Request, exc: InvalidSort) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": {"sort": str(exc)}},
    )


async def not_found_handler(request: Request, exc: SampleNotFound) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def duplicate_handler(request: Request, exc: DuplicateIdentifier) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def storage_failure_handler(request: Request, exc: StorageFailure) -> JSONResponse:
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal storage error"},
    )


def api_info() -> dict:
    return {
        "service": config.SERVICE_NAME,
        "version": config.SERVICE_VERSION,
        "timestamp": utc_now().isoformat(),
        "status": "UP",
        "endpoints": {
            "health": "/healthcheck",
            "samples": "/api/v1/samples",
            "apiDocs": "/docs",
        },
        "note": "Frontend not built. Build it into the static directory to serve it from /.",
    }


def create_app(database_url: str | None = None, static_dir: Path | None = None) -> FastAPI:
    configure_logging(config.log_level())

    engine = build_engine(database_url or config.database_url())
    init_schema(engine)
    repository = SampleRepository(build_session_factory(engine))
    service = SampleService(repository)
    static_root = Path(static_dir) if static_dir is not None else config.static_dir()

    app = FastAPI(title=config.SERVICE_NAME, version=config.SERVICE_VERSION)
    app.state.engine = engine
    app.state.sample_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(InvalidSort, invalid_sort_handler)
    app.add_exception_handler(SampleNotFound, not_found_handler)
    app.add_exception_handler(DuplicateIdentifier, duplicate_handler)
    app.add_exception_handler(StorageFailure, storage_failure_handler)

    app.include_router(build_router(service))

    @app.get("/healthcheck", response_model=HealthOut, tags=["health"])
    def healthcheck() -> HealthOut:
        logger.debug("Health check endpoint called")
        return HealthOut(status="UP", timestamp=utc_now(), service=config.SERVICE_NAME)

    @app.get("/", include_in_schema=False)
    def root():
        index = static_root / "index.html"
        if index.is_file():
            logger.debug("Serving frontend index.html")
            return FileResponse(index, media_type="text/html")
        logger.debug("Frontend not found, serving API info")
        return api_info()

    # client-side routing: known files are served as-is, anything else
    # outside api/ falls back to index.html
    @app.get("/{full_path:path}", include_in_schema=False)
    def static_fallback(full_path: str):
        not_found = JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Not Found"})
        if full_path.startswith("api/"):
            return not_found
        base = static_root.resolve()
        candidate = (base / full_path).resolve()
        if candidate.is_relative_to(base) and candidate.is_file():
            return FileResponse(candidate)
        index = base / "index.html"
        if index.is_file():
            return FileResponse(index, media_type="text/html")
        return not_found

    logger.info("Application ready (static_dir=%s)", static_root)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("sampleapi.main:app", host=config.host(), port=config.port())
