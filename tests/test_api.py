from fastapi.testclient import TestClient

from gardengraph.api import create_app
from gardengraph.session import BuildSession
from tests.fakes import FakeContentSource, make_document


def test_health_check(test_client: TestClient) -> None:
    """Test the health endpoint."""
    response = test_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_backlinks_endpoint_returns_sources(test_client: TestClient) -> None:
    """Test that backlinks are returned in insertion order."""
    response = test_client.get("/api/backlinks/beta")

    assert response.status_code == 200
    assert response.json() == [
        {
            "slug": "alpha",
            "title": "Alpha",
            "type": "note",
            "url": "/notes/alpha",
            "context": "See beta for details.",
        },
        {
            "slug": "2024/01/02",
            "title": "2024/01/02",
            "type": "flow",
            "url": "/flows/2024/01/02",
            "context": "Thinking about beta today.",
        },
    ]


def test_backlinks_endpoint_accepts_flow_slugs(test_client: TestClient) -> None:
    """Test that date-path slugs are routed as one parameter."""
    response = test_client.get("/api/backlinks/2024/01/02")

    assert response.status_code == 200
    assert [b["slug"] for b in response.json()] == ["hello-world"]


def test_backlinks_endpoint_unknown_slug(test_client: TestClient) -> None:
    """Test that an unknown slug gives an empty list rather than a 404."""
    response = test_client.get("/api/backlinks/nonexistent")

    assert response.status_code == 200
    assert response.json() == []


def test_graph_endpoint(test_client: TestClient) -> None:
    """Test that the graph endpoint serves nodes and edges."""
    response = test_client.get("/api/graph")

    assert response.status_code == 200
    data = response.json()
    node_ids = {node["id"] for node in data["nodes"]}
    assert "series:my-series" in node_ids
    assert "2024/01/01" not in node_ids
    assert all(e["source"] in node_ids and e["target"] in node_ids for e in data["edges"])


def test_resolve_endpoint_resolved(test_client: TestClient) -> None:
    """Test resolving a known target."""
    response = test_client.get("/api/links/resolve", params={"target": "first", "display": "One"})

    assert response.status_code == 200
    assert response.json() == {
        "target": "first",
        "display": "One",
        "resolved": True,
        "url": "/notes/alpha",
        "type": "note",
    }


def test_resolve_endpoint_broken(test_client: TestClient) -> None:
    """Test that an unknown target is a broken link, not an error."""
    response = test_client.get("/api/links/resolve", params={"target": "missing"})

    assert response.status_code == 200
    assert response.json()["resolved"] is False
    assert response.json()["display"] == "missing"
    assert response.json()["url"] is None


def test_render_endpoint(test_client: TestClient) -> None:
    """Test rendering wikilinks in posted text."""
    response = test_client.post("/api/render", json={"text": "See [[beta]] and [[nope]]."})

    assert response.status_code == 200
    assert response.json() == {
        "html": 'See <a href="/notes/beta" class="wikilink wikilink--resolved wikilink--note">'
        "beta</a> and "
        '<span class="wikilink wikilink--broken" title="[[nope]] not found">nope</span>.'
    }


def test_backlinks_endpoint_respects_note_flag() -> None:
    """Test that a note with backlinks disabled gets an empty list."""
    source = FakeContentSource(
        notes=[
            make_document("note", "alpha", "See [[beta]]."),
            make_document("note", "beta", backlinks=False),
        ]
    )
    client = TestClient(create_app(session=BuildSession(source=source)))

    response = client.get("/api/backlinks/beta")

    assert response.status_code == 200
    assert response.json() == []
