"""LLM Router API application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from llm_router.ai.dispatcher import ProviderDispatcher, build_dispatcher
from llm_router.ai.image import ImageDispatcher, build_image_dispatcher
from llm_router.api import ask, health, images, preferences
from llm_router.config import ProviderConfig, Settings, get_settings
from llm_router.core.errors import RouterError
from llm_router.core.logging import get_logger, setup_logging
from llm_router.services.preferences import PreferenceStore, build_preference_store

logger = get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Credentials": "true",
}


def error_response(status_code: int, error: str, message: str | None = None) -> JSONResponse:
    body = {"error": error}
    if message is not None:
        body["message"] = message
    return JSONResponse(status_code=status_code, content=body, headers=CORS_HEADERS)


async def router_error_handler(request: Request, exc: RouterError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "request_failed",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return error_response(exc.status_code, exc.error, str(exc))

    logger.warning(
        "request_rejected",
        path=request.url.path,
        status=exc.status_code,
        error=str(exc),
    )
    return error_response(exc.status_code, str(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    logger.warning("request_body_invalid", path=request.url.path, errors=len(errors))
    if any(err.get("type") == "missing" and tuple(err.get("loc", ())) == ("body",) for err in errors):
        return error_response(400, "Request body is required")
    fields = ", ".join(str(err["loc"][-1]) for err in errors if err.get("loc"))
    return error_response(400, f"Invalid request body: {fields}" if fields else "Invalid request body")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(
        "request_failed_unexpectedly",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return error_response(500, "Internal server error", str(exc) or type(exc).__name__)


def create_app(
    settings: Settings | None = None,
    dispatcher: ProviderDispatcher | None = None,
    image_dispatcher: ImageDispatcher | None = None,
    preference_store: PreferenceStore | None = None,
    provider_config: ProviderConfig | None = None,
) -> FastAPI:
    """Build the application.

    Services default to ones built from ``settings``; tests pass doubles in.
    """
    settings = settings or get_settings()
    provider_config = provider_config or ProviderConfig.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "application_starting",
            app_name=settings.app_name,
            environment=settings.environment,
        )
        yield
        logger.info("application_shutting_down")
        try:
            await app.state.dispatcher.aclose()
        except Exception as e:
            logger.error("dispatcher_close_failed", error=str(e))
        logger.info("application_stopped")

    app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)

    app.state.provider_config = provider_config
    app.state.dispatcher = dispatcher or build_dispatcher(settings, provider_config)
    app.state.image_dispatcher = image_dispatcher or build_image_dispatcher(settings)
    app.state.preference_store = preference_store or build_preference_store(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def cors_headers(request: Request, call_next):
        # Non-browser callers send no Origin header; they still get the headers
        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    app.add_exception_handler(RouterError, router_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health.router, tags=["health"])
    app.include_router(ask.router, tags=["ask"])
    app.include_router(images.router, tags=["images"])
    app.include_router(preferences.router, tags=["preferences"])

    return app


_settings = get_settings()

# Initialize logging first
setup_logging(log_level=_settings.log_level, log_format=_settings.log_format)

app = create_app(_settings)
