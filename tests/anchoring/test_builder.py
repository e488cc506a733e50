"""Tests for selector creation."""

from datetime import datetime, timezone

import pytest

from anchoring import AnchorBuilder, AnchoringConfig, InvalidSpan, TextSpan
from anchoring.document import text
from anchoring.utils import content_hash


@pytest.fixture
def builder() -> AnchorBuilder:
    return AnchorBuilder()


class TestSingleLeafSpans:
    """Spans inside one text leaf."""

    def test_all_three_selectors(self, builder, cat_document, span_for) -> None:
        selector = builder.build(cat_document, span_for(cat_document, "cat sat on the mat"))

        assert selector.structural.to_xpath() == "/p[1]/text()[1]"
        assert selector.structural.start_offset == 4
        assert selector.structural.end_offset == 22
        assert selector.structural.text_before == "The "
        assert selector.structural.text_after == ". The cat sat on the rug."

        assert selector.position.start_offset == 4
        assert selector.position.end_offset == 22
        assert selector.position.text == "cat sat on the mat"

        assert selector.fuzzy.text == "cat sat on the mat"
        assert selector.fuzzy.threshold == 0.8

        assert selector.content_hash == content_hash("cat sat on the mat")

    def test_leaf_inside_inline_element(self, builder, article_document, span_for) -> None:
        selector = builder.build(article_document, span_for(article_document, "some"))

        assert selector.structural.to_xpath() == "/p[1]/b[1]/text()[1]"
        assert (selector.structural.start_offset, selector.structural.end_offset) == (0, 4)
        # The structural context only covers the node's own text
        assert selector.structural.text_before == ""
        assert selector.position.text_before.endswith("paragraph with ")

    def test_second_occurrence(self, builder, cat_document, span_for) -> None:
        selector = builder.build(cat_document, span_for(cat_document, "cat sat", occurrence=1))
        assert selector.position.start_offset == 28
        assert selector.fuzzy.text_before == "The cat sat on the mat. The "
        assert selector.fuzzy.text_after == " on the rug."

    def test_created_at(self, builder, cat_document, span_for) -> None:
        moment = datetime(2025, 6, 1, tzinfo=timezone.utc)
        selector = builder.build(cat_document, span_for(cat_document, "mat"), created_at=moment)
        assert selector.created_at == moment


class TestMultiLeafSpans:
    """Spans that cross leaf boundaries."""

    def test_targets_common_ancestor(self, builder, article_document, span_for) -> None:
        span = span_for(article_document, "first paragraph with some test")
        selector = builder.build(article_document, span)

        assert selector.structural.to_xpath() == "/p[1]"
        assert selector.structural.start_offset == 12
        assert selector.structural.end_offset == 42
        assert selector.structural.text_before == "This is the "
        assert selector.structural.text_after == " content."

        assert selector.position.start_offset == 24
        assert selector.position.end_offset == 54
        assert selector.position.text_before == "Test ArticleThis is the "

    def test_span_across_sections(self, builder, article_document, span_for) -> None:
        span = span_for(article_document, "content.This is the second")
        selector = builder.build(article_document, span)

        assert selector.structural.path == ()
        assert selector.structural.start_offset == selector.position.start_offset

    def test_context_lengths_follow_config(self, article_document, span_for) -> None:
        builder = AnchorBuilder(AnchoringConfig(context_length=5, fuzzy_context_length=10))
        selector = builder.build(article_document, span_for(article_document, "second"))

        assert selector.position.text_before == "s the "[-5:]
        assert selector.fuzzy.text_before == "This is the "[-10:]


class TestInvalidSpans:
    """Spans that do not describe text in the document."""

    def test_foreign_leaf(self, builder, cat_document) -> None:
        stranger = text("not in the document")
        with pytest.raises(InvalidSpan, match="not part of the document"):
            builder.build(cat_document, TextSpan(stranger, 0, stranger, 3))

    def test_offset_outside_leaf(self, builder, cat_document) -> None:
        leaf = cat_document.leaves_in_order()[0]
        with pytest.raises(InvalidSpan, match="outside leaf text"):
            builder.build(cat_document, TextSpan(leaf, 0, leaf, 100))

    def test_end_before_start(self, builder, cat_document) -> None:
        leaf = cat_document.leaves_in_order()[0]
        with pytest.raises(InvalidSpan, match="before it starts"):
            builder.build(cat_document, TextSpan(leaf, 10, leaf, 4))

    def test_empty_span(self, builder, cat_document) -> None:
        leaf = cat_document.leaves_in_order()[0]
        with pytest.raises(InvalidSpan, match="empty"):
            builder.build(cat_document, TextSpan(leaf, 4, leaf, 4))

    def test_invalid_span_is_value_error(self, builder, cat_document) -> None:
        leaf = cat_document.leaves_in_order()[0]
        with pytest.raises(ValueError):
            builder.build(cat_document, TextSpan(leaf, -1, leaf, 4))


class TestBuildMany:
    """Batched selector creation."""

    def test_matches_single_builds(self, builder, article_document, span_for) -> None:
        spans = [
            span_for(article_document, "Test"),
            span_for(article_document, "some test"),
            span_for(article_document, "div element"),
        ]

        batch = builder.build_many(article_document, spans)
        single = [builder.build(article_document, span) for span in spans]

        assert [s.structural for s in batch] == [s.structural for s in single]
        assert [s.position for s in batch] == [s.position for s in single]
        assert [s.fuzzy for s in batch] == [s.fuzzy for s in single]

    def test_flattens_once(self, builder, article_document, span_for, counting) -> None:
        spans = [span_for(article_document, word) for word in ("Test", "some", "Nested")]
        document = counting(article_document)

        builder.build_many(document, spans)

        assert document.walks == 1

    def test_shared_ancestor_walked_once(
        self, builder, article_document, span_for, counting
    ) -> None:
        spans = [
            span_for(article_document, needle)
            for needle in ("ArticleThis", "content.This is the second")
        ]
        document = counting(article_document)

        selectors = builder.build_many(document, spans)

        assert [s.structural.path for s in selectors] == [(), ()]
        assert selectors[1].structural.text == "content.This is the second"
        assert document.subtree_walks == 1
        assert document.walks == 1
