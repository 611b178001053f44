from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from notizapp_api.dependencies import get_settings, get_vault, get_watch_service, reset_dependencies
from notizapp_api.domain.exceptions import PathError
from notizapp_api.interface.api.routes import router


def _error(status_code: int, detail: str, request: Request) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
    return JSONResponse(status_code=status_code, content={"detail": detail}, headers={"X-Request-ID": request_id})


def create_app() -> FastAPI:
    reset_dependencies()
    settings = get_settings()
    logger = logging.getLogger("notizapp.api")

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        watcher = get_watch_service()
        if settings.watch_on_startup:
            try:
                watcher.start_watch(get_vault().folder_path())
            except OSError:
                logger.exception("watch_on_startup_failed", extra={"path": str(settings.vault_dir)})
        try:
            yield
        finally:
            watcher.stop()

    app = FastAPI(title="Notizapp API", version=settings.app_version, lifespan=lifespan)

    @app.middleware("http")
    async def request_id_and_logging(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.perf_counter()

        if settings.api_auth_mode == "bearer":
            if request.url.path != "/health":
                token = settings.api_auth_token or ""
                auth = request.headers.get("authorization") or ""
                if not token or auth != f"Bearer {token}":
                    return JSONResponse(
                        status_code=401,
                        content={"detail": "unauthorized"},
                        headers={"X-Request-ID": request_id},
                    )

        try:
            response = await call_next(request)
        except Exception:
            dt_ms = (time.perf_counter() - start) * 1000.0
            logger.exception("request_error", extra={"rid": request_id, "path": request.url.path, "ms": dt_ms})
            return JSONResponse(
                status_code=500,
                content={"detail": "internal_error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

        dt_ms = (time.perf_counter() - start) * 1000.0
        extra = {
            "rid": request_id,
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "ms": dt_ms,
        }
        if settings.api_debug_log:
            extra["query"] = request.url.query
        logger.info("request", extra=extra)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(PathError)
    async def path_error(request: Request, exc: PathError):
        return _error(400, str(exc), request)

    @app.exception_handler(FileNotFoundError)
    async def not_found(request: Request, exc: FileNotFoundError):
        return _error(404, "not_found", request)

    @app.exception_handler(FileExistsError)
    async def already_exists(request: Request, exc: FileExistsError):
        return _error(409, "already_exists", request)

    @app.exception_handler(OSError)
    async def io_error(request: Request, exc: OSError):
        logger.warning("io_error", extra={"rid": getattr(request.state, "request_id", None), "error": str(exc)})
        return _error(500, f"io_error: {exc.strerror or exc}", request)

    app.include_router(router)
    return app


app = create_app()
