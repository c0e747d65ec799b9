"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from starkex_controller.config import get_settings
from starkex_controller.controller import StarkwareController, create_controller


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: load the account mapping once the wallet is configured
    if app.state.controller is not None or get_settings().has_wallet:
        await app.state.get_controller().init()
    yield


def create_app(controller: Optional[StarkwareController] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        controller: Controller to serve; created from settings on first use
            when omitted
    """
    settings = get_settings()

    app = FastAPI(
        title="Starkware Controller API",
        description="Stark key management and signing over JSON-RPC",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.state.controller = controller

    def get_controller() -> StarkwareController:
        if app.state.controller is None:
            app.state.controller = create_controller()
        return app.state.controller

    app.state.get_controller = get_controller

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    from starkex_controller.api.routes import health, rpc

    app.include_router(health.router, tags=["Health"])
    app.include_router(rpc.router, tags=["RPC"])

    return app


# Default app instance
app = create_app()
