"""Shared fixtures and article builders for converter tests.

This module provides:
- A fresh in-memory sink and conversion state per test
- Walker and extractor instances bound to that state
- `article_xml`, a helper that wraps body/back snippets into a minimal
  but complete article so end-to-end tests only spell out what they check
"""

import pytest

from jatsgraph.annotations import AnnotatedTextExtractor
from jatsgraph.config import ConverterSettings
from jatsgraph.configurations import DefaultConfiguration
from jatsgraph.converter import LensConverter
from jatsgraph.elements import parse_xml
from jatsgraph.figures import FigureExtractor
from jatsgraph.state import ConversionState
from jatsgraph.storage.memory import InMemoryArticle
from jatsgraph.walker import StructuralWalker

XLINK = 'xmlns:xlink="http://www.w3.org/1999/xlink"'
MML = 'xmlns:mml="http://www.w3.org/1998/Math/MathML"'


def article_xml(
    body: str = "",
    back: str = "",
    meta: str = "",
    publisher: str = "Other",
    article_id: str = "42",
    title: str = "T",
) -> str:
    """A minimal article with the given body, back matter and extra metadata."""
    return (
        f"<article {XLINK} {MML}>"
        f"<publisher-name>{publisher}</publisher-name>"
        "<front><article-meta>"
        f"<article-id>{article_id}</article-id>"
        f"<title-group><article-title>{title}</article-title></title-group>"
        f"{meta}"
        "</article-meta></front>"
        f"<body>{body}</body>"
        f"<back>{back}</back>"
        "</article>"
    )


def element(xml: str):
    """Parse a snippet, declaring the xlink and mml prefixes on a wrapper."""
    wrapper = parse_xml(f"<wrapper {XLINK} {MML}>{xml}</wrapper>")
    return wrapper[0]


@pytest.fixture
def settings() -> ConverterSettings:
    """Default settings, independent of any jatsgraph.toml on disk."""
    return ConverterSettings()


@pytest.fixture
def sink() -> InMemoryArticle:
    return InMemoryArticle()


@pytest.fixture
def state(sink, settings) -> ConversionState:
    """A conversion state with the default configuration."""
    return ConversionState(doc=sink, configuration=DefaultConfiguration(), settings=settings)


@pytest.fixture
def extractor(state) -> AnnotatedTextExtractor:
    return AnnotatedTextExtractor(state)


@pytest.fixture
def walker(state, extractor) -> StructuralWalker:
    return StructuralWalker(state, extractor)


@pytest.fixture
def figures(state, walker) -> FigureExtractor:
    return FigureExtractor(state, walker)


@pytest.fixture
def converter(settings) -> LensConverter:
    return LensConverter(settings)
