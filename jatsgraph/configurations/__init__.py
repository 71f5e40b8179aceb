"""Publisher configurations and their selection.

The configuration for a conversion is chosen once, from the article's
<publisher-name>. Publishers without a dedicated configuration get
`DefaultConfiguration`.
"""

from enum import Enum

from jatsgraph.configurations.base import ConfigurationInterface, DefaultConfiguration, enhance
from jatsgraph.configurations.elife import ElifeConfiguration
from jatsgraph.configurations.landes import LandesConfiguration
from jatsgraph.configurations.plos import PlosConfiguration


class Publisher(str, Enum):
    ELIFE = "eLife Sciences Publications, Ltd"
    LANDES = "Landes Bioscience"
    PLOS = "Public Library of Science"


CONFIGURATIONS: dict[Publisher, type[ConfigurationInterface]] = {
    Publisher.ELIFE: ElifeConfiguration,
    Publisher.LANDES: LandesConfiguration,
    Publisher.PLOS: PlosConfiguration,
}


def select_configuration(publisher_name: str | None) -> ConfigurationInterface:
    """Return a fresh configuration for the publisher, or the default one."""
    try:
        publisher = Publisher((publisher_name or "").strip())
    except ValueError:
        return DefaultConfiguration()
    return CONFIGURATIONS[publisher]()


__all__ = [
    "CONFIGURATIONS",
    "ConfigurationInterface",
    "DefaultConfiguration",
    "ElifeConfiguration",
    "LandesConfiguration",
    "PlosConfiguration",
    "Publisher",
    "enhance",
    "select_configuration",
]
