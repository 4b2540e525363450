import logging
import os
from pathlib import Path

import yaml

from grounded_search.config.models import GroundedSearchConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GROUNDED_SEARCH_CONFIG"


def get_default_config_path() -> Path:
    """Get path to the bundled default config file."""
    return Path(__file__).parents[3] / "configs" / "default.yaml"


def resolve_config_path(path: Path | str | None = None) -> Path:
    """Pick the config file: explicit *path*, then ``$GROUNDED_SEARCH_CONFIG``,
    then the bundled default."""
    if path:
        return Path(path).expanduser()
    from_env = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if from_env:
        return Path(from_env).expanduser()
    return get_default_config_path()


def load_config(path: Path | str | None = None) -> GroundedSearchConfig:
    """Load and validate a YAML config.

    Args:
        path: Config file; see :func:`resolve_config_path` when omitted.

    Returns:
        Validated GroundedSearchConfig. An empty document yields the defaults.

    Raises:
        FileNotFoundError: If the resolved file doesn't exist.
        ValueError: If the document is not a mapping.
        pydantic.ValidationError: If config is invalid.
    """
    resolved = resolve_config_path(path)
    logger.debug(f"Loading config from {resolved}")
    document = yaml.safe_load(resolved.read_text(encoding="utf-8"))

    if document is None:
        return GroundedSearchConfig()
    if not isinstance(document, dict):
        raise ValueError(
            f"Config {resolved} must be a mapping, got {type(document).__name__}"
        )
    return GroundedSearchConfig.model_validate(document)
