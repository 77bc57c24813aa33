from fastapi import APIRouter, HTTPException
from loguru import logger
from pydantic import BaseModel

from gardengraph.domain.graph import KnowledgeGraph
from gardengraph.domain.links import BacklinkSource, RenderableLink, WikilinkOccurrence
from gardengraph.session import BuildSession


class RenderRequest(BaseModel):
    text: str


class RenderResponse(BaseModel):
    html: str


def _create_backlinks_endpoint(session: BuildSession):
    """Create the backlinks endpoint handler."""

    async def get_backlinks(slug: str) -> list[BacklinkSource]:
        try:
            return session.get_backlinks(slug)
        except Exception as e:
            logger.error(f"Error building backlinks for '{slug}': {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e

    return get_backlinks


def _create_graph_endpoint(session: BuildSession):
    """Create the knowledge graph endpoint handler."""

    async def get_graph() -> KnowledgeGraph:
        try:
            return session.knowledge_graph
        except Exception as e:
            logger.error(f"Error generating knowledge graph: {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e

    return get_graph


def _create_resolve_endpoint(session: BuildSession):
    """Create the link resolution endpoint handler."""

    async def resolve_link(target: str, display: str | None = None) -> RenderableLink:
        """Resolve a wikilink target. A broken link is a valid response, not a 404."""
        target = target.strip()
        occurrence = WikilinkOccurrence(
            target=target,
            display=(display or "").strip() or target,
            start=0,
            end=0,
        )
        try:
            return session.resolver.resolve(occurrence)
        except Exception as e:
            logger.error(f"Error resolving wikilink '{target}': {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e

    return resolve_link


def _create_render_endpoint(session: BuildSession):
    """Create the wikilink rendering endpoint handler."""

    async def render(request: RenderRequest) -> RenderResponse:
        try:
            return RenderResponse(html=session.render(request.text))
        except Exception as e:
            logger.error(f"Error rendering wikilinks: {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e

    return render


def get_endpoints_router(*, session: BuildSession) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    async def health_check():
        return {"status": "healthy"}

    router.get("/api/backlinks/{slug:path}")(_create_backlinks_endpoint(session))
    router.get("/api/graph")(_create_graph_endpoint(session))
    router.get("/api/links/resolve")(_create_resolve_endpoint(session))
    router.post("/api/render")(_create_render_endpoint(session))

    return router
