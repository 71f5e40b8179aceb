"""Annotation model: typed, range-addressed decorations over node text.

An annotation points at a text field of a node through `path`
(`(node_id, field_name)`) and covers the characters `range[0]` up to, but
not including, `range[1]` of that field. Ranges are end-exclusive
everywhere in this package.

Reference annotations (`citation_reference`, `figure_reference`) carry a
`target`: the generated id of the referenced node when it was known at
scan time, otherwise the raw source identifier from the XML, which the
consumer has to resolve.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AnnotationType(str, Enum):
    STRONG = "strong"
    EMPHASIS = "emphasis"
    CODE = "code"
    SUBSCRIPT = "subscript"
    SUPERSCRIPT = "superscript"
    UNDERLINE = "underline"
    LINK = "link"
    CITATION_REFERENCE = "citation_reference"
    FIGURE_REFERENCE = "figure_reference"


REFERENCE_TYPES = frozenset({AnnotationType.CITATION_REFERENCE, AnnotationType.FIGURE_REFERENCE})


class Annotation(BaseModel):
    """A single annotation over the plain text at `path`."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    type: AnnotationType
    path: tuple[str, str] = Field(description="(node id, field name) of the annotated text.")
    range: tuple[int, int] = Field(description="End-exclusive [start, end) character range.")
    target: str | None = None
    url: str | None = None

    @model_validator(mode="after")
    def _check(self) -> "Annotation":
        start, end = self.range
        if start < 0:
            raise ValueError("annotation range start must be >= 0")
        if end < start:
            raise ValueError("annotation range end must be >= start")
        if self.type in REFERENCE_TYPES and not self.target:
            raise ValueError(f"{self.type.value} annotation requires a target")
        return self

    @property
    def start(self) -> int:
        return self.range[0]

    @property
    def end(self) -> int:
        return self.range[1]

    def contains(self, other: "Annotation") -> bool:
        """Return True if `other` lies on the same path within this range."""
        return self.path == other.path and self.start <= other.start and other.end <= self.end
