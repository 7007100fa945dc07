import logging
import time
from contextlib import asynccontextmanager
from collections.abc import Callable, Awaitable

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.coin_pack import coin_pack_router
from api.game import game_router
from api.health import health_router
from api.wallet import wallet_router
from helper.config_helper import VERSION, Settings, load_settings
from helper.store_helper import close_store, init_store

logger = logging.getLogger(__name__)


def _error_body(message: str) -> dict[str, object]:
    return {"success": False, "error": message}


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_store(app, settings.demo_user_id)
        logger.info("Coin Lobby ready (%s)", settings.environment)
        yield
        await close_store(app)

    app = FastAPI(title="Coin Lobby API", version=VERSION, lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    @app.middleware("http")
    async def security_headers(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        if settings.environment == "production":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response

    if settings.environment == "development":

        @app.middleware("http")
        async def log_requests(
            request: Request, call_next: Callable[[Request], Awaitable[Response]]
        ):
            start = time.perf_counter()
            response = await call_next(request)
            logger.info(
                "%s %s - %d - %dms",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - start) * 1000,
            )
            return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        message = str(exc.detail)
        if exc.status_code == 404 and message == "Not Found":
            message = f"Route {request.url.path} not found"
        return JSONResponse(_error_body(message), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'][1:]) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )
        return JSONResponse(_error_body(problems or "Invalid request"), status_code=400)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        message = str(exc) if settings.environment == "development" else "Internal server error"
        return JSONResponse(_error_body(message), status_code=500)

    app.include_router(health_router)
    app.include_router(wallet_router, prefix="/api/wallet")
    app.include_router(coin_pack_router, prefix="/api/coin-packs")
    app.include_router(game_router, prefix="/api/games")
    return app


def run() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
