"""Element-tree adapter for NLM/JATS input.

Wraps `xml.etree.ElementTree` with the handful of operations the converter
needs:

- DOM-like child sequences that interleave text runs and elements, since
  ElementTree stores mixed content in `.text`/`.tail`
- A closed `ElementKind` enumeration of every element the converter knows
- A small selector language for descendant queries: comma separated
  alternatives of `tag` or `tag[attr=value]`, matched in document order
- Namespace-aware attribute lookup (`xlink:href`) and tag names (`mml:math`)
"""

from __future__ import annotations

import copy
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence, Union

from jatsgraph.errors import ImporterError

NAMESPACES = {
    "xlink": "http://www.w3.org/1999/xlink",
    "mml": "http://www.w3.org/1998/Math/MathML",
}
_PREFIXES = {uri: prefix for prefix, uri in NAMESPACES.items()}

for _prefix, _uri in NAMESPACES.items():
    ET.register_namespace(_prefix, _uri)


class ElementKind(str, Enum):
    """Element kinds the converter dispatches on.

    Values are the (prefixed) tag names. `TEXT` and `COMMENT` stand for
    non-element child nodes; everything unrecognised is `UNKNOWN`.
    """

    TEXT = "#text"
    COMMENT = "#comment"
    UNKNOWN = "#unknown"

    ARTICLE = "article"
    FRONT = "front"
    BODY = "body"
    BACK = "back"

    P = "p"
    SEC = "sec"
    TITLE = "title"
    LABEL = "label"
    LIST = "list"
    LIST_ITEM = "list-item"
    DISP_FORMULA = "disp-formula"
    ALTERNATIVES = "alternatives"
    BOXED_TEXT = "boxed-text"

    FIG = "fig"
    FIG_GROUP = "fig-group"
    TABLE_WRAP = "table-wrap"
    SUPPLEMENTARY_MATERIAL = "supplementary-material"
    MEDIA = "media"
    CAPTION = "caption"

    BOLD = "bold"
    ITALIC = "italic"
    MONOSPACE = "monospace"
    SUB = "sub"
    SUP = "sup"
    UNDERLINE = "underline"
    EXT_LINK = "ext-link"
    XREF = "xref"

    MATH = "mml:math"
    TEX_MATH = "tex-math"

    REF = "ref"
    ELEMENT_CITATION = "element-citation"
    MIXED_CITATION = "mixed-citation"

    DAY = "day"
    MONTH = "month"
    YEAR = "year"


_KINDS = {kind.value: kind for kind in ElementKind}
# MathML without a namespace declaration
_KINDS["math"] = ElementKind.MATH


@dataclass(frozen=True)
class TextRun:
    """A run of character data between (or around) elements."""

    text: str


Node = Union[ET.Element, TextRun]


def parse_xml(data: bytes | str) -> ET.Element:
    """Parse an article, keeping comments so they can be skipped explicitly.

    Raises:
        ImporterError: If the input is not well-formed XML.
    """
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        return ET.fromstring(data, parser=parser)
    except ET.ParseError as e:
        raise ImporterError(f"Failed to parse XML: {e}") from e


def is_comment(node: Node) -> bool:
    return isinstance(node, ET.Element) and node.tag is ET.Comment


def tag_name(node: Node) -> str:
    """Prefixed tag name of an element (`mml:math`), or a `#` pseudo name."""
    if isinstance(node, TextRun):
        return ElementKind.TEXT.value
    if not isinstance(node.tag, str):
        return ElementKind.COMMENT.value if node.tag is ET.Comment else ElementKind.UNKNOWN.value
    return _prefixed(node.tag)


def _prefixed(name: str) -> str:
    if name.startswith("{"):
        uri, local = name[1:].split("}", 1)
        prefix = _PREFIXES.get(uri)
        return f"{prefix}:{local}" if prefix else local
    return name


def kind_of(node: Node) -> ElementKind:
    return _KINDS.get(tag_name(node).lower(), ElementKind.UNKNOWN)


def attr(el: ET.Element | None, name: str, default: str | None = None) -> str | None:
    """Look up an attribute by (optionally prefixed) name."""
    if el is None:
        return default
    if ":" in name:
        prefix, local = name.split(":", 1)
        uri = NAMESPACES.get(prefix)
        if uri is not None:
            value = el.get(f"{{{uri}}}{local}")
            if value is not None:
                return value
    return el.get(name, default)


def child_nodes(el: ET.Element) -> list[Node]:
    """Ordered child nodes: text runs, elements and comments."""
    nodes: list[Node] = []
    if el.text:
        nodes.append(TextRun(el.text))
    for child in el:
        nodes.append(child)
        if child.tail:
            nodes.append(TextRun(child.tail))
    return nodes


def element_children(el: ET.Element) -> list[ET.Element]:
    """Child elements only (no text, no comments)."""
    return [child for child in el if isinstance(child.tag, str)]


def text_content(el: ET.Element | None) -> str:
    """Character data of an element and its descendants, without comments."""
    if el is None:
        return ""
    parts: list[str] = []
    _collect_text(el, parts)
    return "".join(parts)


def _collect_text(el: ET.Element, parts: list[str]) -> None:
    if isinstance(el.tag, str) and el.text:
        parts.append(el.text)
    for child in el:
        if isinstance(child.tag, str):
            _collect_text(child, parts)
        if child.tail:
            parts.append(child.tail)


def to_markup(el: ET.Element) -> str:
    """Serialize an element without its trailing text."""
    detached = copy.copy(el)
    detached.tail = None
    return ET.tostring(detached, encoding="unicode")


# -----------------------
# Selectors
# -----------------------

_SELECTOR_RE = re.compile(r"""^([\w.:-]+)(?:\[([\w.:-]+)=(?:'([^']*)'|"([^"]*)"|([^\]]*))\])?$""")


@dataclass(frozen=True)
class _Alternative:
    tag: str
    attribute: str | None = None
    value: str | None = None

    def matches(self, el: ET.Element) -> bool:
        if not isinstance(el.tag, str) or tag_name(el).lower() != self.tag:
            return False
        if self.attribute is None:
            return True
        return attr(el, self.attribute) == self.value


def _parse_selector(selector: str) -> list[_Alternative]:
    alternatives = []
    for part in selector.split(","):
        m = _SELECTOR_RE.match(part.strip())
        if m is None:
            raise ValueError(f"Unsupported selector: {part.strip()!r}")
        tag, attribute = m.group(1).lower(), m.group(2)
        value = next((v for v in m.group(3, 4, 5) if v is not None), None)
        alternatives.append(_Alternative(tag, attribute, value))
    return alternatives


def select_all(el: ET.Element | None, selector: str, include_self: bool = False) -> list[ET.Element]:
    """All descendants matching the selector, in document order."""
    if el is None:
        return []
    alternatives = _parse_selector(selector)
    return [
        node
        for node in el.iter()
        if (include_self or node is not el) and any(alt.matches(node) for alt in alternatives)
    ]


def select_one(el: ET.Element | None, selector: str, include_self: bool = False) -> ET.Element | None:
    """First descendant matching the selector, or None."""
    if el is None:
        return None
    alternatives = _parse_selector(selector)
    for node in el.iter():
        if (include_self or node is not el) and any(alt.matches(node) for alt in alternatives):
            return node
    return None


def direct_children(el: ET.Element, kind: ElementKind) -> list[ET.Element]:
    return [child for child in el if kind_of(child) is kind]


# -----------------------
# Cursor
# -----------------------


@dataclass
class ChildCursor:
    """Explicit position over an ordered child sequence.

    `pos` points at the child being handled. Loops advance after handling
    a child; a scan that stops early rewinds by one so that the caller's
    own advance lands on the child that stopped it.
    """

    nodes: Sequence[Node]
    pos: int = field(default=0)

    @classmethod
    def over(cls, el: ET.Element) -> "ChildCursor":
        return cls(child_nodes(el))

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def done(self) -> bool:
        return self.pos >= len(self.nodes)

    @property
    def current(self) -> Node:
        return self.nodes[self.pos]

    def advance(self) -> None:
        self.pos += 1

    def rewind(self) -> None:
        self.pos -= 1


def person_name(name_el: ET.Element | None) -> str:
    """'Given-names Surname' of a <name> element."""
    names = []
    given = select_one(name_el, "given-names")
    surname = select_one(name_el, "surname")
    if given is not None:
        names.append(text_content(given))
    if surname is not None:
        names.append(text_content(surname))
    return " ".join(names)
