import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from quietseed.core.config import settings
from quietseed.core.logging import configure_logging
from quietseed.services.seed import seed_demo_content
from quietseed.storage import DuplicateError, InvalidFieldError, Storage, build_storage

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )

async def duplicate_error_handler(request: Request, exc: DuplicateError):
    return JSONResponse(status_code=409, content={"message": str(exc)})

async def invalid_field_handler(request: Request, exc: InvalidFieldError):
    return JSONResponse(status_code=400, content={"message": str(exc)})

async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(storage: Optional[Storage] = None, seed: Optional[bool] = None) -> FastAPI:
    """Build the API around *storage*, or the store named in settings."""
    configure_logging(settings.LOG_LEVEL)
    should_seed = settings.SEED_DEMO_DATA if seed is None else seed

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.storage is None:
            app.state.storage = build_storage(settings)
            logger.info("Using %s storage", settings.STORAGE_BACKEND)
        if should_seed:
            seed_demo_content(app.state.storage)
        yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        lifespan=lifespan,
        description="API for The Quiet Seed blog",
    )
    app.state.storage = storage

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DuplicateError, duplicate_error_handler)
    app.add_exception_handler(InvalidFieldError, invalid_field_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/")
    def read_root():
        return {"message": "Welcome to The Quiet Seed API. Visit /docs for Swagger UI."}

    from quietseed.routers import auth, categories, posts, search, site, users

    app.include_router(posts.router, prefix="/api/posts", tags=["posts"])
    app.include_router(search.router, prefix="/api", tags=["posts"])
    app.include_router(categories.router, prefix="/api/categories", tags=["categories"])
    app.include_router(site.router, prefix="/api", tags=["site"])
    app.include_router(auth.router, prefix="/api", tags=["auth"])
    app.include_router(users.router, prefix="/api/user", tags=["users"])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
