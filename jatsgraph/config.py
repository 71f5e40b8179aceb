"""Load converter settings from TOML (e.g. jatsgraph.toml).

Config file is looked up in order:
  1. Path in JATSGRAPH_CONFIG env var (if set)
  2. jatsgraph.toml in the jatsgraph package directory
  3. jatsgraph.toml in the current working directory

If no file is found, built-in defaults are used. Only the [converter]
table is read; unknown keys are ignored.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from jatsgraph.logging import setup_logging

logger = setup_logging()

DEFAULT_DOI_BASE_URL = "http://dx.doi.org/"
# Placeholders until a configuration strategy resolves the real media URL
DEFAULT_FIGURE_URL = "http://images.wisegeek.com/young-calico-cat.jpg"
DEFAULT_SUPPLEMENT_URL = "http://meh.com"


class ConverterSettings(BaseModel):
    """Settings shared by every conversion of one converter instance."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    strict: bool = Field(
        default=False,
        description="Raise ImporterError on coverage gaps instead of recording them.",
    )
    doi_base_url: str = DEFAULT_DOI_BASE_URL
    placeholder_figure_url: str = DEFAULT_FIGURE_URL
    placeholder_supplement_url: str = DEFAULT_SUPPLEMENT_URL
    log_level: str = "INFO"


def _default_config_paths() -> list[Path]:
    """Return paths to check for jatsgraph.toml (first existing wins)."""
    paths: list[Path] = []
    if os.environ.get("JATSGRAPH_CONFIG"):
        paths.append(Path(os.environ["JATSGRAPH_CONFIG"]))
    paths.append(Path(__file__).resolve().parent / "jatsgraph.toml")
    paths.append(Path.cwd() / "jatsgraph.toml")
    return paths


def load_config(path: Path | None = None, **overrides: Any) -> ConverterSettings:
    """Load converter settings.

    Args:
        path: Explicit config file; skips the default lookup when given.
        **overrides: Values that win over the file (e.g. from CLI flags).

    Returns:
        Validated settings. Falls back to defaults when the file is missing,
        unreadable or invalid.
    """
    values: dict[str, Any] = {}
    for candidate in [path] if path is not None else _default_config_paths():
        if not candidate.is_file():
            continue
        try:
            with open(candidate, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Ignoring unreadable config {candidate}: {e}")
            continue
        section = data.get("converter")
        if isinstance(section, dict):
            values.update(section)
        break
    values.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return ConverterSettings(**values)
    except ValidationError as e:
        logger.warning(f"Invalid converter settings, using defaults: {e}")
        return ConverterSettings(**{k: v for k, v in overrides.items() if v is not None})
