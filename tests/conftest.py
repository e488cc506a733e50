"""
Pytest configuration and fixtures for anchoring tests
"""

import pytest

from anchoring.document import FlattenedText, TreeDocument, element, text
from anchoring.document.protocols import DocumentModel
from anchoring.logging_config import IndentState
from anchoring.models import TextSpan

CAT_TEXT = "The cat sat on the mat. The cat sat on the rug."


@pytest.fixture(autouse=True)
def reset_log_indent():
    """Start every test at indentation level zero"""
    IndentState.reset()
    yield
    IndentState.reset()


@pytest.fixture
def cat_document() -> TreeDocument:
    """Single paragraph, single text leaf"""
    return TreeDocument(element("body", element("p", text(CAT_TEXT))))


@pytest.fixture
def article_document() -> TreeDocument:
    """Nested document with several leaves per paragraph"""
    return TreeDocument(
        element(
            "article",
            element("h1", text("Test Article")),
            element(
                "p",
                text("This is the first paragraph with "),
                element("b", text("some")),
                text(" test content."),
            ),
            element("p", text("This is the second paragraph with more content.")),
            element(
                "div",
                element("p", text("Nested paragraph inside a div element.")),
            ),
        )
    )


@pytest.fixture
def span_for():
    """Factory fixture mapping a quoted substring to a TextSpan.

    Usage:
        def test_example(cat_document, span_for):
            span = span_for(cat_document, "cat sat", occurrence=1)
    """

    def _span_for(document: DocumentModel, needle: str, occurrence: int = 0) -> TextSpan:
        flattened = FlattenedText.from_document(document)
        start = -1
        for _ in range(occurrence + 1):
            start = flattened.text.index(needle, start + 1)
        end = start + len(needle)
        start_leaf, start_offset = flattened.locate(start)
        end_leaf, end_offset = flattened.locate(end, is_end=True)
        return TextSpan(start_leaf, start_offset, end_leaf, end_offset)

    return _span_for


class CountingDocument:
    """Wraps a document and counts full-document and subtree leaf walks"""

    def __init__(self, document: DocumentModel) -> None:
        self._document = document
        self.walks = 0
        self.subtree_walks = 0

    def leaves_in_order(self):
        self.walks += 1
        return self._document.leaves_in_order()

    def leaves_under(self, node):
        self.subtree_walks += 1
        return self._document.leaves_under(node)

    def __getattr__(self, name):
        return getattr(self._document, name)


@pytest.fixture
def counting():
    """Factory fixture wrapping a document in a CountingDocument"""
    return CountingDocument
