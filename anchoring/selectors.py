"""
Portable selector models for anchored text spans.

A MultiSelector bundles three independent descriptors of the same span:

- StructuralSelector: indexed sibling path plus offsets inside the target node
- PositionSelector: absolute offsets over the flattened document text
- FuzzySelector: quote with wide context for approximate re-location

Selectors are immutable values. They serialize to JSON or YAML with camelCase
field names so that an external store can persist them untouched.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Self

import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from anchoring.config import DEFAULT_FUZZY_THRESHOLD
from anchoring.utils import content_hash

TEXT_KIND = "#text"
"""Node kind used for text-bearing leaves in structural paths."""

_STEP_PATTERN = re.compile(r"^(?P<kind>text\(\)|[^\[\]/]+)(?:\[(?P<index>\d+)\])?$")


class _SelectorModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class PathStep(_SelectorModel):
    """
    One level of a structural path.

    Attributes:
        kind: Node kind (tag name for branch nodes, "#text" for leaves)
        index: 1-based position among same-kind siblings, including this node
    """

    kind: str = Field(min_length=1)
    index: int = Field(ge=1)

    @classmethod
    def parse(cls, step: str) -> Self:
        """Parse a single step such as ``p[2]`` or ``text()[1]``."""
        match = _STEP_PATTERN.match(step.strip())
        if match is None:
            raise ValueError(f"Invalid path step: '{step}'")
        kind = match.group("kind")
        if kind == "text()":
            kind = TEXT_KIND
        return cls(kind=kind, index=int(match.group("index") or 1))

    def render(self) -> str:
        kind = "text()" if self.kind == TEXT_KIND else self.kind
        return f"{kind}[{self.index}]"


def parse_path(value: str) -> tuple[PathStep, ...]:
    """
    Parse an XPath-like path string into path steps.

    Example:
        parse_path("/div[2]/p[1]/text()[1]")
    """
    return tuple(PathStep.parse(part) for part in value.split("/") if part)


def format_path(path: tuple[PathStep, ...]) -> str:
    """Render path steps as an XPath-like string (``/`` for the root)."""
    return "/" + "/".join(step.render() for step in path)


def _check_span_text(text: str, start: int, end: int) -> None:
    if end < start:
        raise ValueError(f"endOffset {end} is before startOffset {start}")
    if len(text) != end - start:
        raise ValueError(
            f"text length {len(text)} does not match offsets {start}-{end}"
        )


class StructuralSelector(_SelectorModel):
    """
    Tier 1 selector: indexed sibling path from the document root.

    The path targets the common ancestor of the span (the leaf itself when
    the span lies in one leaf); offsets are relative to that node's text.

    Example:
        selector = StructuralSelector(
            path="/article[1]/p[2]/text()[1]",
            start_offset=12,
            end_offset=18,
            text="second",
        )
    """

    path: tuple[PathStep, ...] = Field(
        default=(), validation_alias=AliasChoices("path", "xpath")
    )
    start_offset: int = Field(ge=0)
    end_offset: int = Field(ge=0)
    text: str = Field(min_length=1)
    text_before: str = ""
    text_after: str = ""

    @field_validator("path", mode="before")
    @classmethod
    def coerce_path(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_path(value)
        if isinstance(value, (list, tuple)):
            return tuple(
                PathStep.parse(step) if isinstance(step, str) else step
                for step in value
            )
        return value

    @model_validator(mode="after")
    def check_offsets(self) -> Self:
        _check_span_text(self.text, self.start_offset, self.end_offset)
        return self

    def to_xpath(self) -> str:
        """Render the path as an XPath-like string."""
        return format_path(self.path)


class PositionSelector(_SelectorModel):
    """Tier 2 selector: absolute offsets over the flattened document text."""

    start_offset: int = Field(ge=0)
    end_offset: int = Field(ge=0)
    text: str = Field(min_length=1)
    text_before: str = ""
    text_after: str = ""

    @model_validator(mode="after")
    def check_offsets(self) -> Self:
        _check_span_text(self.text, self.start_offset, self.end_offset)
        return self


class FuzzySelector(_SelectorModel):
    """Tier 3 selector: quote plus wide context for approximate matching."""

    text: str = Field(min_length=1)
    text_before: str = ""
    text_after: str = ""
    threshold: float = Field(default=DEFAULT_FUZZY_THRESHOLD, ge=0.0, le=1.0)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MultiSelector(_SelectorModel):
    """
    All three selectors for one span, plus a content hash for deduplication.

    Use ``create`` to build one from its parts; ``from_json``/``from_yaml``
    to load a persisted one. The legacy key ``xpath`` is accepted in place of
    ``structural`` and integer epoch milliseconds in place of ``createdAt``.

    Example:
        selector = MultiSelector.from_json(payload)
        print(selector.text, selector.structural.to_xpath())
    """

    structural: StructuralSelector = Field(
        validation_alias=AliasChoices("structural", "xpath")
    )
    position: PositionSelector
    fuzzy: FuzzySelector
    content_hash: str
    created_at: datetime = Field(default_factory=_now)

    @model_validator(mode="after")
    def check_same_text(self) -> Self:
        if not (self.structural.text == self.position.text == self.fuzzy.text):
            raise ValueError("structural, position and fuzzy selectors disagree on text")
        return self

    @classmethod
    def create(
        cls,
        structural: StructuralSelector,
        position: PositionSelector,
        fuzzy: FuzzySelector,
        created_at: datetime | None = None,
    ) -> Self:
        """Bundle selectors, computing the content hash from their text."""
        return cls(
            structural=structural,
            position=position,
            fuzzy=fuzzy,
            content_hash=content_hash(structural.text),
            created_at=created_at or _now(),
        )

    @property
    def text(self) -> str:
        """The anchored text."""
        return self.structural.text

    def to_dict(self) -> dict[str, Any]:
        """Plain data form with camelCase keys (JSON-compatible values)."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls.model_validate(data)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, payload: str | bytes) -> Self:
        return cls.model_validate_json(payload)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), allow_unicode=True, sort_keys=False)

    @classmethod
    def from_yaml(cls, yaml_text: str) -> Self:
        """
        Load a MultiSelector from YAML text.

        Example:
            selector = MultiSelector.from_yaml('''
                structural:
                  path: /p[1]/text()[1]
                  startOffset: 4
                  endOffset: 7
                  text: cat
                ...
            ''')
        """
        data = yaml.safe_load(yaml_text)
        return cls.from_dict(data)

    def to_w3c(self) -> list[dict[str, Any]]:
        """
        Export as W3C Web Annotation selectors.

        Returns a TextQuoteSelector, a TextPositionSelector and an
        XPathSelector refined by a TextPositionSelector within its node.
        """
        return [
            {
                "type": "TextQuoteSelector",
                "exact": self.fuzzy.text,
                "prefix": self.fuzzy.text_before,
                "suffix": self.fuzzy.text_after,
            },
            {
                "type": "TextPositionSelector",
                "start": self.position.start_offset,
                "end": self.position.end_offset,
            },
            {
                "type": "XPathSelector",
                "value": self.structural.to_xpath(),
                "refinedBy": {
                    "type": "TextPositionSelector",
                    "start": self.structural.start_offset,
                    "end": self.structural.end_offset,
                },
            },
        ]
