"""Load extraction configuration from a TOML/JSON file or an inline string.

Settings may sit at the top level or under an ``[extraction]`` table, so
the options can share a file with other tools' settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging
import tomllib

from docgraph.config.schema import ExtractionConfig

logger = logging.getLogger("docgraph.runtime.config_loader")

ConfigSource = Optional[Union[str, Path]]


def _looks_inline(source: str) -> bool:
    stripped = source.lstrip()
    return stripped.startswith(("{", "[")) or "=" in source or "\n" in source


def _parse(text: str, is_json: Optional[bool]) -> Dict[str, Any]:
    """Parse a configuration document and select its ``extraction`` table.

    ``is_json=None`` tries JSON first and falls back to TOML.
    """
    if is_json is None:
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            data = tomllib.loads(text)
    elif is_json:
        data = json.loads(text)
    else:
        data = tomllib.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Top-level configuration must be a mapping/dict")
    section = data.get("extraction")
    return section if isinstance(section, dict) else data


def load_extraction_config(source: ConfigSource) -> ExtractionConfig:
    """Load ExtractionConfig for the CLI ``--config`` option.

    Args:
        source: None for the defaults, a path to a ``.toml``/``.json``
            file, or an inline TOML/JSON string.

    Returns:
        ExtractionConfig instance.

    Raises:
        OSError: The configuration file cannot be read.
        ValueError: The document is malformed or holds invalid values.
    """
    if source is None:
        logger.debug("No config source provided; using default ExtractionConfig")
        return ExtractionConfig.default()

    if isinstance(source, str) and _looks_inline(source):
        logger.info("Loading configuration from inline string")
        return ExtractionConfig.from_dict(_parse(source, None))

    path = Path(source)
    logger.info("Loading configuration from file: %s", path)
    text = path.read_text(encoding="utf-8")
    return ExtractionConfig.from_dict(_parse(text, path.suffix.lower() == ".json"))


__all__ = ["ConfigSource", "load_extraction_config"]
