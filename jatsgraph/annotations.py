"""Annotated-text extraction.

Converts a run of mixed content (text plus inline markup such as
`<bold>`, `<italic>` or `<xref>`) into a flat string and a list of
annotations over it. Inline markup is handled recursively, so nested
markup yields nested annotations whose ranges lie inside the enclosing
one.

Offsets are counted in UTF-16 code units, which is what the consuming
reader application indexes strings by. Ranges are end-exclusive.

Annotations are not created in the document right away. They are queued
on the conversion state and created once the whole article has been
walked, so that references to nodes created later (or earlier, during the
global figure and citation passes) can be resolved.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from jatsgraph.elements import ChildCursor, ElementKind, TextRun, attr, kind_of, tag_name
from jatsgraph.errors import GapKind, ImporterError
from jatsgraph.state import ConversionState
from jatsschema.annotation import Annotation, AnnotationType

ANNOTATION_TYPES: dict[ElementKind, AnnotationType | None] = {
    ElementKind.BOLD: AnnotationType.STRONG,
    ElementKind.ITALIC: AnnotationType.EMPHASIS,
    ElementKind.MONOSPACE: AnnotationType.CODE,
    ElementKind.SUB: AnnotationType.SUBSCRIPT,
    ElementKind.SUP: AnnotationType.SUPERSCRIPT,
    ElementKind.UNDERLINE: AnnotationType.UNDERLINE,
    ElementKind.EXT_LINK: AnnotationType.LINK,
    # classified by its ref-type attribute
    ElementKind.XREF: None,
}

REFERENCE_KINDS: dict[str, AnnotationType] = {
    "bibr": AnnotationType.CITATION_REFERENCE,
    "fig": AnnotationType.FIGURE_REFERENCE,
    "table": AnnotationType.FIGURE_REFERENCE,
    "supplementary-material": AnnotationType.FIGURE_REFERENCE,
}


def utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def is_annotation(kind: ElementKind) -> bool:
    return kind in ANNOTATION_TYPES


class AnnotatedTextExtractor:
    """Turns inline content into plain text plus queued annotations."""

    def __init__(self, state: ConversionState) -> None:
        self.state = state

    def extract(self, cursor: ChildCursor, offset: int = 0, nested: bool = False) -> str:
        """Consume text and inline markup from `cursor`.

        Args:
            cursor: Position in the child sequence; advanced past every
                consumed child.
            offset: Character offset of the first consumed child within the
                text field on top of the annotation stack.
            nested: True when called for the children of an inline element.

        Returns:
            The plain text of all consumed children.

        Raises:
            ImporterError: If unsupported markup appears inside inline markup.
                At paragraph level the same markup ends the scan instead; the
                cursor is rewound by one so the caller's next advance lands on
                the element that stopped it.
        """
        parts: list[str] = []
        while not cursor.done:
            node = cursor.current
            if isinstance(node, TextRun):
                parts.append(node.text)
                offset += utf16_len(node.text)
            elif kind_of(node) is ElementKind.COMMENT:
                pass
            elif is_annotation(kind_of(node)):
                start = offset
                inner = self.extract(ChildCursor.over(node), offset, nested=True)
                parts.append(inner)
                offset += utf16_len(inner)
                self.create_annotation(node, start, offset)
            elif nested:
                raise ImporterError(f"Node not yet supported in annotated text: {tag_name(node)}")
            else:
                # a block-level element ends the run
                cursor.rewind()
                break
            cursor.advance()
        return "".join(parts)

    def create_annotation(self, el: ET.Element, start: int, end: int) -> Annotation | None:
        """Queue an annotation for `el` covering [start, end) at the stack top."""
        kind = kind_of(el)
        target = None
        url = None
        if kind is ElementKind.XREF:
            ref_type = attr(el, "ref-type") or ""
            anno_type = REFERENCE_KINDS.get(ref_type)
            if anno_type is None:
                self.state.report(GapKind.UNSUPPORTED_REFERENCE, el, f"ignoring xref with ref-type {ref_type!r}")
                return None
            source_id = attr(el, "rid")
            if not source_id:
                self.state.report(GapKind.MISSING_PART, el, "xref without rid")
                return None
            # Unresolved targets keep the source id; the consumer resolves them
            target_node = self.state.doc.get_node_by_source_id(source_id)
            target = target_node.id if target_node is not None else source_id
        else:
            anno_type = ANNOTATION_TYPES.get(kind)
            if anno_type is None:
                self.state.report(GapKind.UNSUPPORTED_ELEMENT, el, "ignoring annotation")
                return None
            if anno_type is AnnotationType.LINK:
                url = attr(el, "xlink:href")

        anno = Annotation(
            id=self.state.next_id(anno_type.value),
            type=anno_type,
            path=self.state.top.path,
            range=(start, end),
            target=target,
            url=url,
        )
        self.state.annotations.append(anno)
        return anno
