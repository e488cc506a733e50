"""Tests for the in-memory TreeDocument."""

import pytest

from anchoring.document import DocumentModel, TreeDocument, TreePosition, element, text
from anchoring.document.paths import common_ancestor
from anchoring.selectors import format_path, parse_path


def leaf_texts(document: TreeDocument) -> list[str]:
    return [document.text_of(leaf) for leaf in document.leaves_in_order()]


class TestTreeBasics:
    """Tests for node construction and traversal."""

    def test_satisfies_protocol(self, article_document) -> None:
        assert isinstance(article_document, DocumentModel)

    def test_leaves_in_document_order(self, article_document) -> None:
        assert leaf_texts(article_document) == [
            "Test Article",
            "This is the first paragraph with ",
            "some",
            " test content.",
            "This is the second paragraph with more content.",
            "Nested paragraph inside a div element.",
        ]

    def test_leaves_under_leaf_is_itself(self, article_document) -> None:
        leaf = article_document.leaves_in_order()[2]
        assert article_document.leaves_under(leaf) == [leaf]

    def test_parent_of_root_is_none(self, article_document) -> None:
        assert article_document.parent_of(article_document.root) is None

    def test_leaves_cannot_have_children(self) -> None:
        with pytest.raises(ValueError, match="cannot have children"):
            text("leaf").append(text("child"))

    def test_append_moves_node(self) -> None:
        moved = text("moving")
        first = element("p", moved)
        second = element("p")

        second.append(moved)

        assert first.children == []
        assert moved.parent is second

    def test_make_span(self, cat_document) -> None:
        leaf = cat_document.leaves_in_order()[0]
        assert cat_document.make_span(leaf, 4) == TreePosition(leaf, 4)


class TestTreePaths:
    """Tests for structural paths over a TreeDocument."""

    @pytest.mark.parametrize(
        ("index", "expected"),
        [
            (0, "/h1[1]/text()[1]"),
            (1, "/p[1]/text()[1]"),
            (2, "/p[1]/b[1]/text()[1]"),
            (3, "/p[1]/text()[2]"),
            (4, "/p[2]/text()[1]"),
            (5, "/div[1]/p[1]/text()[1]"),
        ],
    )
    def test_leaf_paths(self, article_document, index: int, expected: str) -> None:
        leaf = article_document.leaves_in_order()[index]
        path = article_document.structural_path_of(leaf)
        assert format_path(path) == expected
        assert article_document.resolve_path(path) is leaf

    def test_root_path_is_empty(self, article_document) -> None:
        assert article_document.structural_path_of(article_document.root) == ()
        assert article_document.resolve_path(()) is article_document.root

    @pytest.mark.parametrize("path", ["/p[3]", "/p[1]/b[2]", "/table[1]/text()[1]"])
    def test_missing_path(self, article_document, path: str) -> None:
        assert article_document.resolve_path(parse_path(path)) is None

    def test_foreign_node_rejected(self, article_document) -> None:
        with pytest.raises(ValueError, match="not part of this document"):
            article_document.structural_path_of(text("elsewhere"))

    def test_path_follows_insertions(self, article_document) -> None:
        leaf = article_document.leaves_in_order()[4]
        article_document.root.insert(0, element("p", text("Inserted first.")))
        assert format_path(article_document.structural_path_of(leaf)) == "/p[3]/text()[1]"


class TestCommonAncestor:
    """Tests for the common ancestor helper."""

    def test_siblings(self, article_document) -> None:
        leaves = article_document.leaves_in_order()
        paragraph = article_document.root.children[1]
        assert common_ancestor(leaves[1], leaves[3], article_document.parent_of) is paragraph

    def test_nested(self, article_document) -> None:
        leaves = article_document.leaves_in_order()
        paragraph = article_document.root.children[1]
        assert common_ancestor(leaves[2], leaves[1], article_document.parent_of) is paragraph

    def test_same_node(self, article_document) -> None:
        leaf = article_document.leaves_in_order()[0]
        assert common_ancestor(leaf, leaf, article_document.parent_of) is leaf

    def test_across_sections(self, article_document) -> None:
        leaves = article_document.leaves_in_order()
        assert (
            common_ancestor(leaves[0], leaves[5], article_document.parent_of)
            is article_document.root
        )

    def test_unrelated_trees(self, article_document) -> None:
        leaf = article_document.leaves_in_order()[0]
        assert common_ancestor(leaf, text("elsewhere"), article_document.parent_of) is None
