from tests.fakes.fake_content_source import FakeContentSource, make_document

__all__ = ["FakeContentSource", "make_document"]
