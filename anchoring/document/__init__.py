"""Document models that spans are anchored in."""

from anchoring.document.flattened import FlattenedText, LeafPosition
from anchoring.document.lxml_document import LxmlDocument, TextLeaf, TextPosition
from anchoring.document.protocols import DocumentModel
from anchoring.document.tree import Node, TreeDocument, TreePosition, element, text

__all__ = [
    "DocumentModel",
    "FlattenedText",
    "LeafPosition",
    "LxmlDocument",
    "Node",
    "TextLeaf",
    "TextPosition",
    "TreeDocument",
    "TreePosition",
    "element",
    "text",
]
