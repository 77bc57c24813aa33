from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gardengraph.api.endpoints import get_endpoints_router
from gardengraph.session import BuildSession


def create_app(*, session: BuildSession) -> FastAPI:
    """Create FastAPI app."""
    app = FastAPI()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(router=get_endpoints_router(session=session))

    return app
