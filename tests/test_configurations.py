"""Tests for publisher configuration selection and node enhancement."""

import pytest

from jatsgraph.config import DEFAULT_FIGURE_URL, ConverterSettings
from jatsgraph.configurations import (
    DefaultConfiguration,
    ElifeConfiguration,
    LandesConfiguration,
    PlosConfiguration,
    Publisher,
    enhance,
    select_configuration,
)
from jatsgraph.errors import GapKind, ImporterError
from jatsgraph.figures import FigureExtractor
from jatsgraph.state import ConversionState
from jatsgraph.storage.memory import InMemoryArticle
from jatsgraph.walker import StructuralWalker
from jatsschema.nodes import FigureNode

from conftest import element


def extractor_for(configuration, doc_id="00123", strict=False):
    sink = InMemoryArticle()
    sink.set_id(doc_id)
    state = ConversionState(doc=sink, configuration=configuration, settings=ConverterSettings(strict=strict))
    return FigureExtractor(state, StructuralWalker(state)), state


class BrokenConfiguration(DefaultConfiguration):
    name = "broken"

    def enhance_figure(self, state, node, element):
        node.url = "half-done"
        node.label = "mangled"
        raise RuntimeError("boom")


class TestSelection:
    @pytest.mark.parametrize(
        "publisher, expected",
        [
            (Publisher.ELIFE.value, ElifeConfiguration),
            (Publisher.LANDES.value, LandesConfiguration),
            (Publisher.PLOS.value, PlosConfiguration),
            ("  Landes Bioscience\n", LandesConfiguration),
            ("Some Other Press", DefaultConfiguration),
            (None, DefaultConfiguration),
        ],
    )
    def test_select(self, publisher, expected):
        assert type(select_configuration(publisher)) is expected

    def test_fresh_instance_per_call(self):
        assert select_configuration(Publisher.ELIFE.value) is not select_configuration(Publisher.ELIFE.value)


class TestElife:
    def test_figure_url(self):
        figures, _ = extractor_for(ElifeConfiguration())
        node = figures.figure(element('<fig id="fig1"><graphic xlink:href="elife00123f001"/></fig>'))
        assert node.url == "https://cdn.elifesciences.org/elife-articles/00123/jpg/elife00123f001.jpg"

    def test_figure_without_graphic_keeps_placeholder(self):
        figures, _ = extractor_for(ElifeConfiguration())
        assert figures.figure(element("<fig/>")).url == DEFAULT_FIGURE_URL

    def test_video(self):
        figures, _ = extractor_for(ElifeConfiguration())
        node = figures.video(
            element(
                '<media mimetype="video" xlink:href="elife00123v001.mov"><label>Video 1</label>'
                "<caption><title>Moving</title><p>x</p></caption></media>"
            )
        )
        assert node.url == "https://cdn.elifesciences.org/elife-articles/00123/media/elife00123v001.mov"
        assert node.poster == "https://cdn.elifesciences.org/elife-articles/00123/jpg/elife00123v001.jpg"
        assert node.title == "Moving"

    def test_supplement(self):
        figures, _ = extractor_for(ElifeConfiguration())
        node = figures.supplement(
            element('<supplementary-material><label>S1</label><media xlink:href="s1.zip"/></supplementary-material>')
        )
        assert node.url == "https://cdn.elifesciences.org/elife-articles/00123/suppl/s1.zip"

    def test_article_doi(self):
        _, state = extractor_for(ElifeConfiguration())
        state.configuration.enhance_article(
            None, state, element('<article><article-id pub-id-type="doi">10.7554/eLife.00123</article-id></article>')
        )
        assert state.doc.root.doi == "http://dx.doi.org/10.7554/eLife.00123"


class TestPlos:
    def test_figure_url(self):
        figures, _ = extractor_for(PlosConfiguration())
        node = figures.figure(element('<fig><object-id pub-id-type="doi">10.1371/journal.pone.0001.g001</object-id></fig>'))
        assert node.url == (
            "http://www.plosone.org/article/fetchObject.action"
            "?uri=info:doi/10.1371/journal.pone.0001.g001&representation=PNG_M"
        )

    def test_supplement_url(self):
        figures, _ = extractor_for(PlosConfiguration())
        node = figures.supplement(element('<supplementary-material xlink:href="info:doi/10.1371/s001"/>'))
        assert node.url == "http://www.plosone.org/article/fetchSingleRepresentation.action?uri=info:doi/10.1371/s001"


class TestLandes:
    def test_figure_url(self):
        figures, _ = extractor_for(LandesConfiguration())
        node = figures.figure(element('<fig><graphic xlink:href="cc/2012/cc0001f1.jpg"/></fig>'))
        assert node.url == "https://www.landesbioscience.com/article_figure/journals/cc/2012/cc0001f1.jpg"

    def test_supplement_url_from_media(self):
        figures, _ = extractor_for(LandesConfiguration())
        node = figures.supplement(element('<supplementary-material><media xlink:href="data.xls"/></supplementary-material>'))
        assert node.url == "data.xls"


class TestEnhanceFailure:
    def test_node_is_restored_and_gap_recorded(self):
        figures, state = extractor_for(BrokenConfiguration())
        node = figures.figure(element('<fig id="f1"><label>Figure 1</label></fig>'))
        assert node.url == DEFAULT_FIGURE_URL
        assert node.label == "Figure 1"
        assert state.doc.get("figure_1") is node
        [gap] = state.diagnostics
        assert gap.kind is GapKind.ENHANCEMENT_FAILED
        assert "boom" in gap.message

    def test_enhance_reports_success(self, state):
        node = FigureNode(id="figure_1")
        assert enhance(state, "enhance_figure", node, element("<fig/>")) is True
        assert state.diagnostics == []

    def test_strict_mode_raises(self):
        figures, _ = extractor_for(BrokenConfiguration(), strict=True)
        with pytest.raises(ImporterError, match="enhance_figure"):
            figures.figure(element("<fig/>"))
