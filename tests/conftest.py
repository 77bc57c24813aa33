from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from gardengraph.api import create_app
from gardengraph.domain.content import ContentCorpus, ContentDocument, SeriesInfo
from gardengraph.session import BuildSession
from tests.fakes import FakeContentSource, make_document


@pytest.fixture
def test_posts() -> list[ContentDocument]:
    return [
        make_document(
            "post",
            "hello-world",
            "Intro post. See [[alpha]] and [[2024/01/02|yesterday's flow]].",
            title="Hello World",
            series="my-series",
        ),
        make_document(
            "post",
            "second-post",
            "A follow-up to [[hello-world]].",
            title="Second Post",
            series="my-series",
        ),
    ]


@pytest.fixture
def test_notes() -> list[ContentDocument]:
    return [
        make_document("note", "alpha", "See [[beta]] for details.", aliases=["a", "first"]),
        make_document("note", "beta", "Back to [[a|the alias]]."),
        make_document("note", "gamma", "[[gamma]] is self-referential."),
    ]


@pytest.fixture
def test_flows() -> list[ContentDocument]:
    return [
        make_document("flow", "2024/01/01", "[[nonexistent-note]]"),
        make_document("flow", "2024/01/02", "Thinking about [[beta]] today."),
        make_document("flow", "2024/01/03", "Nothing linked here."),
    ]


@pytest.fixture
def test_series() -> dict[str, SeriesInfo]:
    return {"my-series": SeriesInfo(slug="my-series", title="My Series")}


@pytest.fixture
def test_corpus(
    test_posts: list[ContentDocument],
    test_notes: list[ContentDocument],
    test_flows: list[ContentDocument],
    test_series: dict[str, SeriesInfo],
) -> ContentCorpus:
    return ContentCorpus(posts=test_posts, notes=test_notes, flows=test_flows, series=test_series)


@pytest.fixture
def fake_content_source(test_corpus: ContentCorpus) -> FakeContentSource:
    return FakeContentSource(
        posts=test_corpus.posts,
        notes=test_corpus.notes,
        flows=test_corpus.flows,
        series=test_corpus.series,
    )


@pytest.fixture
def session(fake_content_source: FakeContentSource) -> BuildSession:
    return BuildSession(source=fake_content_source)


@pytest.fixture
def test_client(session: BuildSession) -> TestClient:
    """Create test client over a session backed by the fake content source."""
    app = create_app(session=session)
    return TestClient(app)


@pytest.fixture
def content_directory(tmp_path: Path) -> Path:
    """Create a content tree with every collection used by the file content source."""
    content_dir = tmp_path / "content"

    posts_dir = content_dir / "posts"
    posts_dir.mkdir(parents=True)
    (posts_dir / "hello-world.md").write_text(
        "---\ntitle: Hello World\ndate: 2024-01-05\nseries: my-series\n---\n"
        "Intro post. See [[alpha]].\n"
    )
    (posts_dir / "folder-post").mkdir()
    (posts_dir / "folder-post" / "index.mdx").write_text(
        "---\ntitle: Folder Post\ndate: 2024-02-01\nseries: my-series\n---\n"
        "Linking to [[2024/01/02]].\n"
    )
    (posts_dir / "draft-post.md").write_text(
        "---\ntitle: Draft Post\ndate: 2024-03-01\ndraft: true\n---\nSee [[alpha]].\n"
    )

    notes_dir = content_dir / "notes"
    notes_dir.mkdir()
    (notes_dir / "alpha.md").write_text(
        "---\ntitle: Alpha\naliases:\n  - a\n  - first\n---\nSee [[beta]] for details.\n"
    )
    (notes_dir / "beta.md").write_text(
        "---\ntitle: Beta\naliases: b\nbacklinks: false\n---\nNo links here.\n"
    )

    flow_dir = content_dir / "flows" / "2024" / "01"
    flow_dir.mkdir(parents=True)
    (flow_dir / "02.md").write_text("---\ntitle: A Tuesday\n---\nThinking about [[beta]].\n")
    (flow_dir / "03.md").write_text("Nothing linked here.\n")
    (content_dir / "flows" / "stray.md").write_text("Not a dated flow.\n")

    series_dir = content_dir / "series" / "my-series"
    series_dir.mkdir(parents=True)
    (series_dir / "index.md").write_text("---\ntitle: My Series\n---\nA series of posts.\n")

    return content_dir
