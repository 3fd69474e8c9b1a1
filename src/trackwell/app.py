"""FastAPI application factory for Trackwell."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from trackwell.common.config import get_settings
from trackwell.common.exceptions import TrackwellError
from trackwell.common.schemas import ErrorResponse, HealthResponse


async def _trackwell_error_handler(request: Request, exc: TrackwellError) -> JSONResponse:
    body = ErrorResponse(error=type(exc).__name__, code=exc.code, detail=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def create_app() -> FastAPI:
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        from trackwell.deps import get_db
        db = get_db()
        await db.init()
        await db.create_all()
        yield
        # Shutdown
        await db.close()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(TrackwellError, _trackwell_error_handler)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=settings.api_version)

    # Mount routers
    from trackwell.products.router import router as product_router
    from trackwell.checkpoints.router import router as checkpoint_router
    from trackwell.authorization.router import router as verifier_router
    from trackwell.transfers.router import router as transfer_router
    from trackwell.certifications.router import router as certification_router
    from trackwell.events.router import router as event_router

    prefix = settings.api_prefix
    app.include_router(product_router, prefix=prefix, tags=["products"])
    app.include_router(checkpoint_router, prefix=prefix, tags=["checkpoints"])
    app.include_router(verifier_router, prefix=prefix)
    app.include_router(transfer_router, prefix=prefix)
    app.include_router(certification_router, prefix=prefix)
    app.include_router(event_router, prefix=prefix, tags=["events"])

    return app
