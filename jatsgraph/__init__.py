"""
Lens Article Converter - NLM/JATS XML to Article Graphs.

Converts scientific articles encoded in NLM/JATS XML into a graph of typed
nodes (headings, paragraphs, figures, citations, ...) with range-addressed
annotations over their text, ready for a reading application.

    from jatsgraph import LensConverter

    result = LensConverter().convert(xml_bytes)
    result.document.view("content")
"""

from jatsgraph.config import ConverterSettings, load_config
from jatsgraph.configurations import ConfigurationInterface, DefaultConfiguration, Publisher, select_configuration
from jatsgraph.converter import ConversionResult, ConversionStage, LensConverter
from jatsgraph.errors import CoverageGap, GapKind, ImporterError
from jatsgraph.ids import IdGenerator
from jatsgraph.state import ConversionState
from jatsgraph.storage.memory import InMemoryArticle

__all__ = [
    "ConfigurationInterface",
    "ConversionResult",
    "ConversionStage",
    "ConversionState",
    "ConverterSettings",
    "CoverageGap",
    "DefaultConfiguration",
    "GapKind",
    "IdGenerator",
    "ImporterError",
    "InMemoryArticle",
    "LensConverter",
    "Publisher",
    "load_config",
    "select_configuration",
]

__version__ = "0.1.0"
