"""Conversion driver: NLM/JATS article XML to an article graph.

A conversion runs through fixed stages:

    SELECT_CONFIG -> EXTRACT_FIGURES -> EXTRACT_CITATIONS -> WALK_FRONT
    -> WALK_BODY -> ENHANCE_ARTICLE -> WALK_BACK -> FLUSH_ANNOTATIONS
    -> REBUILD_VIEWS -> DONE

Figures and citations are extracted globally before any text is walked, and
annotations are only created in the document once everything else exists.
That way a reference annotation can point at any node of the article,
regardless of where its target appears in the XML.

Missing structural elements (article root, front matter, article-meta) are
fatal and raise `ImporterError`. Everything else the converter cannot
handle is recorded as a coverage gap and skipped.

Example:
    ```python
    converter = LensConverter()
    result = converter.convert(xml_bytes)
    print(result.document.root.title, len(result.diagnostics))
    ```
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from jatsgraph.annotations import AnnotatedTextExtractor
from jatsgraph.config import ConverterSettings, load_config
from jatsgraph.configurations import select_configuration
from jatsgraph.elements import ElementKind, kind_of, parse_xml, select_one, text_content
from jatsgraph.errors import CoverageGap, GapKind, ImporterError
from jatsgraph.figures import FigureExtractor
from jatsgraph.front import FrontMatterReader, article_id
from jatsgraph.logging import setup_logging
from jatsgraph.state import ConversionState
from jatsgraph.storage.memory import InMemoryArticle
from jatsgraph.walker import StructuralWalker
from jatsschema.storage import DocumentSinkInterface

logger = setup_logging()


class ConversionStage(str, Enum):
    SELECT_CONFIG = "select_config"
    EXTRACT_FIGURES = "extract_figures"
    EXTRACT_CITATIONS = "extract_citations"
    WALK_FRONT = "walk_front"
    WALK_BODY = "walk_body"
    ENHANCE_ARTICLE = "enhance_article"
    WALK_BACK = "walk_back"
    FLUSH_ANNOTATIONS = "flush_annotations"
    REBUILD_VIEWS = "rebuild_views"
    DONE = "done"


class ConversionResult(BaseModel):
    """The converted document together with everything that was skipped."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    document: DocumentSinkInterface
    configuration: str
    diagnostics: list[CoverageGap] = Field(default_factory=list)


class LensConverter:
    """Converts NLM/JATS articles; stateless between conversions.

    Every call to `convert` builds its own `ConversionState`, so one
    converter can be shared by independent conversions.
    """

    def __init__(self, settings: ConverterSettings | None = None) -> None:
        self.settings = settings if settings is not None else load_config()

    def convert(self, source: bytes | str | ET.Element, doc: DocumentSinkInterface | None = None) -> ConversionResult:
        """Convert one article.

        Args:
            source: Raw XML, or an already parsed element tree root.
            doc: Sink to write into. A new `InMemoryArticle` when omitted.

        Returns:
            The filled document and the coverage gaps found on the way.

        Raises:
            ImporterError: On structurally invalid input. The document
                written so far must be discarded.
        """
        root = source if isinstance(source, ET.Element) else parse_xml(source)
        doc = doc if doc is not None else InMemoryArticle()
        state = self._select_config(root, doc)
        try:
            self.article(state, root)
            self._advance(state, ConversionStage.FLUSH_ANNOTATIONS)
            self.flush_annotations(state)
            self._advance(state, ConversionStage.REBUILD_VIEWS)
            for view in doc.views:
                doc.rebuild(view)
        except ImporterError as e:
            logger.error(f"Conversion failed during {state.stage}: {e}")
            raise
        self._advance(state, ConversionStage.DONE)
        return ConversionResult(
            document=doc,
            configuration=state.configuration.name,
            diagnostics=list(state.diagnostics),
        )

    def _advance(self, state: ConversionState, stage: ConversionStage) -> None:
        state.stage = stage.value
        logger.debug(f"stage: {stage.value}")

    def _select_config(self, root: ET.Element, doc: DocumentSinkInterface) -> ConversionState:
        publisher = select_one(root, "publisher-name", include_self=True)
        config = select_configuration(text_content(publisher) if publisher is not None else None)
        logger.debug(f"Using {config.name} configuration")
        return ConversionState(doc=doc, configuration=config, settings=self.settings, stage=ConversionStage.SELECT_CONFIG.value)

    def article(self, state: ConversionState, root: ET.Element) -> None:
        """Convert the <article> element of a parsed document."""
        article = root if kind_of(root) is ElementKind.ARTICLE else select_one(root, "article")
        if article is None:
            raise ImporterError("Expected to find an 'article' element.")

        state.doc.set_id(article_id(article))
        walker = StructuralWalker(state, AnnotatedTextExtractor(state))
        figures = FigureExtractor(state, walker)

        self._advance(state, ConversionStage.EXTRACT_FIGURES)
        figures.extract_figures(article)
        self._advance(state, ConversionStage.EXTRACT_CITATIONS)
        figures.extract_citations(article)

        self._advance(state, ConversionStage.WALK_FRONT)
        front = select_one(article, "front")
        if front is None:
            raise ImporterError("Expected to find a 'front' element.")
        FrontMatterReader(state, walker).front(front)

        self._advance(state, ConversionStage.WALK_BODY)
        body = select_one(article, "body")
        if body is not None:
            nodes = walker.body_nodes(list(body))
            state.show(nodes)

        self._advance(state, ConversionStage.ENHANCE_ARTICLE)
        self.enhance_article(state, article)

        self._advance(state, ConversionStage.WALK_BACK)
        back = select_one(article, "back")
        if back is not None:
            self.back(state, back)

    def enhance_article(self, state: ConversionState, article: ET.Element) -> None:
        config = state.configuration
        try:
            config.enhance_article(self, state, article)
        except Exception as e:
            logger.exception(f"{config.name}.enhance_article failed: {e}")
            state.report(GapKind.ENHANCEMENT_FAILED, article, f"enhance_article failed: {e}")

    def back(self, state: ConversionState, back: ET.Element) -> None:
        """Back matter needs no processing; citations are extracted globally."""

    def flush_annotations(self, state: ConversionState) -> None:
        """Create the queued annotations, in the order they were found.

        Reference targets still holding a source id are looked up once more,
        now that every node exists; targets that still do not resolve keep
        the source id.
        """
        doc = state.doc
        for anno in state.annotations:
            if anno.target is not None and doc.get(anno.target) is None:
                target = doc.get_node_by_source_id(anno.target)
                if target is not None:
                    anno = anno.model_copy(update={"target": target.id})
            doc.create(anno)
        logger.debug(f"Created {len(state.annotations)} annotations")
        state.annotations.clear()
