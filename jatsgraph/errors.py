"""Failure taxonomy of a conversion.

Two kinds of problems can occur while converting an article:

- **Fatal structural failures** raise `ImporterError`. A required element is
  missing (article root, front matter, article-meta) or unsupported markup
  shows up inside an annotation. The partially built document is invalid.
- **Coverage gaps** are recorded as `CoverageGap` and the conversion goes
  on. They flag input the converter recognises but does not implement, or
  does not recognise at all.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ImporterError(ValueError):
    """Fatal structural failure; the conversion is aborted."""


class GapKind(str, Enum):
    UNSUPPORTED_ELEMENT = "unsupported_element"
    UNSUPPORTED_REFERENCE = "unsupported_reference"
    MISSING_PART = "missing_part"
    UNSTRUCTURED_CITATION = "unstructured_citation"
    UNSUPPORTED_FORMULA = "unsupported_formula"
    ENHANCEMENT_FAILED = "enhancement_failed"


class CoverageGap(BaseModel):
    """A skipped input construct, kept for reporting."""

    model_config = ConfigDict(frozen=True)

    kind: GapKind
    element: str
    message: str
    source_id: str | None = None

    def __str__(self) -> str:
        where = f" (id={self.source_id})" if self.source_id else ""
        return f"{self.kind.value}: <{self.element}>{where} {self.message}"
