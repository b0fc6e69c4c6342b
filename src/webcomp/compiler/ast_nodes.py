"""Markup tree consumed by the emitters.

Nodes compare and hash by identity so that analysis metadata can be
attached to them through a plain dictionary.
"""

import html
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, Iterator, List, Optional, Union

# HTML void elements that don't have closing tags
VOID_ELEMENTS = {
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
}


@dataclass(eq=False)
class Text:
    """A run of character data."""

    data: str

    @property
    def outer_html(self) -> str:
        return html.escape(self.data, quote=False)


@dataclass(eq=False)
class Element:
    """An HTML element."""

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)
    line: int = 0
    column: int = 0

    @property
    def id(self) -> Optional[str]:
        return self.attributes.get("id")

    @property
    def elements(self) -> List["Element"]:
        """Child elements, skipping text nodes."""
        return [c for c in self.children if isinstance(c, Element)]

    def iter(self, skip: AbstractSet[str] = frozenset()) -> Iterator["Element"]:
        """Yield this element and every descendant element, depth-first."""
        if self.tag in skip:
            return
        yield self
        for child in self.elements:
            yield from child.iter(skip)

    def find_by_tag(self, tag: str) -> List["Element"]:
        return [e for e in self.iter() if e.tag == tag]

    def get_element_by_id(self, element_id: str) -> Optional["Element"]:
        for e in self.iter():
            if e.id == element_id:
                return e
        return None

    def inner_html(self, skip: AbstractSet[str] = frozenset()) -> str:
        parts: List[str] = []
        for child in self.children:
            if isinstance(child, Element):
                if child.tag in skip:
                    continue
                parts.append(child.render(skip))
            else:
                parts.append(child.outer_html)
        return "".join(parts)

    @property
    def outer_html(self) -> str:
        return self.render()

    def render(self, skip: AbstractSet[str] = frozenset()) -> str:
        attrs = "".join(
            f' {name}="{html.escape(value, quote=True)}"'
            for name, value in self.attributes.items()
        )
        if self.tag in VOID_ELEMENTS:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{self.inner_html(skip)}</{self.tag}>"


@dataclass(eq=False)
class Document:
    """Root of a parsed HTML file."""

    children: List["Node"] = field(default_factory=list)

    @property
    def elements(self) -> List[Element]:
        return [c for c in self.children if isinstance(c, Element)]

    def iter(self, skip: AbstractSet[str] = frozenset()) -> Iterator[Element]:
        for child in self.elements:
            yield from child.iter(skip)

    def find_by_tag(self, tag: str) -> List[Element]:
        return [e for e in self.iter() if e.tag == tag]

    @property
    def body(self) -> Optional[Element]:
        for e in self.iter():
            if e.tag == "body":
                return e
        return None

    def body_html(self, skip: AbstractSet[str] = frozenset()) -> str:
        """Markup of <body>, or of the whole document when it has no body."""
        body = self.body
        if body is not None:
            return body.inner_html(skip)
        parts: List[str] = []
        for child in self.children:
            if isinstance(child, Element):
                if child.tag not in skip:
                    parts.append(child.render(skip))
            else:
                parts.append(child.outer_html)
        return "".join(parts)


Node = Union[Element, Text]
