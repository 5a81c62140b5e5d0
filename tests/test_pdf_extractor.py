"""Tests for PDF text extraction."""

from docqa.rag import pdf_extractor
from docqa.rag.pdf_extractor import FALLBACK_TEXT, extract_text, extract_text_per_page


class FakePage:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error

    def extract_text(self):
        if self.error:
            raise self.error
        return self.text


def fake_reader(pages):
    class FakeReader:
        def __init__(self, source):
            self.source = source
            self.pages = pages

    return FakeReader


class TestExtractText:
    def test_pages_are_normalized(self, monkeypatch):
        monkeypatch.setattr(
            pdf_extractor,
            "PdfReader",
            fake_reader([FakePage("Hello   world\nagain"), FakePage(None)]),
        )

        assert extract_text_per_page("doc.pdf") == ["Hello world again", ""]

    def test_failing_page_is_skipped(self, monkeypatch):
        pages = [
            FakePage("First page."),
            FakePage(error=ValueError("broken stream")),
            FakePage("Third page."),
        ]
        monkeypatch.setattr(pdf_extractor, "PdfReader", fake_reader(pages))

        assert extract_text("doc.pdf") == "First page.\n\nThird page."

    def test_blank_pages_are_dropped(self, monkeypatch):
        pages = [FakePage("One."), FakePage("   "), FakePage("Two.")]
        monkeypatch.setattr(pdf_extractor, "PdfReader", fake_reader(pages))

        assert extract_text("doc.pdf") == "One.\n\nTwo."

    def test_unreadable_document_uses_fallback(self, monkeypatch):
        def broken_reader(source):
            raise FileNotFoundError(source)

        monkeypatch.setattr(pdf_extractor, "PdfReader", broken_reader)

        assert extract_text("missing.pdf") == FALLBACK_TEXT

    def test_fallback_text_is_a_faq(self):
        assert "Q: What is this chatbot?" in FALLBACK_TEXT
        assert "Q: Is my data secure?" in FALLBACK_TEXT
