"""
Configuration management for shelfcheck.

Handles loading and saving user configuration from:
- XDG config directory: ~/.config/shelfcheck/config.json
- Fallback: ~/.shelfcheck/config.json
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .similarity.metrics import EDITION_KEYWORDS

logger = logging.getLogger(__name__)


@dataclass
class SimilarityConfig:
    """Weights and thresholds for duplicate detection."""
    isbn_weight: float = 0.4
    title_weight: float = 0.3
    author_weight: float = 0.2
    publisher_weight: float = 0.1
    min_score: float = 0.3
    edition_keywords: List[str] = field(default_factory=lambda: sorted(EDITION_KEYWORDS))


@dataclass
class CLIConfig:
    """CLI default options."""
    verbose: bool = False
    limit: int = 10
    output_format: str = "table"


@dataclass
class ShelfcheckConfig:
    """Main shelfcheck configuration."""
    similarity: SimilarityConfig = field(default_factory=SimilarityConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "similarity": asdict(self.similarity),
            "cli": asdict(self.cli),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ShelfcheckConfig':
        """Create from dictionary.

        Raises:
            TypeError: If the data or one of its sections is not a mapping
        """
        if not isinstance(data, dict):
            raise TypeError(f"config must be a JSON object, got {type(data).__name__}")
        similarity_data = data.get("similarity", {})
        cli_data = data.get("cli", {})
        return cls(
            similarity=SimilarityConfig(**similarity_data),
            cli=CLIConfig(**cli_data),
        )


def get_config_path() -> Path:
    """
    Get configuration file path.

    Follows XDG Base Directory specification:
    1. ~/.config/shelfcheck/config.json
    2. Fallback: ~/.shelfcheck/config.json

    Returns:
        Path to config file
    """
    xdg_config_home = Path.home() / ".config"
    if xdg_config_home.exists():
        config_dir = xdg_config_home / "shelfcheck"
    else:
        config_dir = Path.home() / ".shelfcheck"

    return config_dir / "config.json"


def load_config() -> ShelfcheckConfig:
    """
    Load configuration from file.

    Returns:
        ShelfcheckConfig instance with loaded values or defaults
    """
    config_path = get_config_path()

    if not config_path.exists():
        return ShelfcheckConfig()

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
        return ShelfcheckConfig.from_dict(data)
    except (json.JSONDecodeError, OSError, TypeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}; using defaults")
        return ShelfcheckConfig()


def save_config(config: ShelfcheckConfig) -> Path:
    """
    Save configuration to file.

    Args:
        config: Configuration to save

    Returns:
        Path the configuration was written to
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)

    logger.info(f"Configuration saved to {config_path}")
    return config_path


def ensure_config_exists() -> Path:
    """
    Ensure configuration file exists, creating with defaults if not.

    Returns:
        Path to config file
    """
    config_path = get_config_path()

    if not config_path.exists():
        save_config(ShelfcheckConfig())
        logger.info(f"Created default configuration at {config_path}")

    return config_path


def update_config(
    # Similarity settings
    min_score: Optional[float] = None,
    isbn_weight: Optional[float] = None,
    title_weight: Optional[float] = None,
    author_weight: Optional[float] = None,
    publisher_weight: Optional[float] = None,
    # CLI settings
    cli_verbose: Optional[bool] = None,
    cli_limit: Optional[int] = None,
    cli_output_format: Optional[str] = None,
) -> ShelfcheckConfig:
    """
    Update configuration.

    Only updates provided values, leaving others unchanged.
    """
    config = load_config()

    if min_score is not None:
        if not 0.0 <= min_score <= 1.0:
            raise ValueError(f"min_score must be between 0 and 1, got {min_score}")
        config.similarity.min_score = min_score
    if isbn_weight is not None:
        config.similarity.isbn_weight = isbn_weight
    if title_weight is not None:
        config.similarity.title_weight = title_weight
    if author_weight is not None:
        config.similarity.author_weight = author_weight
    if publisher_weight is not None:
        config.similarity.publisher_weight = publisher_weight

    if cli_verbose is not None:
        config.cli.verbose = cli_verbose
    if cli_limit is not None:
        config.cli.limit = cli_limit
    if cli_output_format is not None:
        config.cli.output_format = cli_output_format

    save_config(config)
    return config
