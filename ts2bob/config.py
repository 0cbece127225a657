"""
Configuration schemas for ts2bob.

Provides validated configuration classes using dataclasses, loadable from
YAML.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .core.encoding import HIGHEST_BIT, MAX_WINDOW_LENGTH, validate_layout

logger = logging.getLogger(__name__)


@dataclass
class WeaselConfig:
    """Word extraction configuration."""
    max_word_length: int = 6
    alphabet_size: int = 4
    window_lengths: List[int] = field(default_factory=lambda: [8, 16, 32])
    normalize_mean: bool = True
    lower_bounding: bool = True
    blocks: Optional[int] = None

    def __post_init__(self):
        """Validate word extraction configuration."""
        if self.max_word_length < 1:
            raise ValueError(f"max_word_length must be >= 1, got {self.max_word_length}")
        if self.alphabet_size < 2:
            raise ValueError(f"alphabet_size must be >= 2, got {self.alphabet_size}")
        if self.alphabet_size & (self.alphabet_size - 1):
            raise ValueError(f"alphabet_size must be a power of two, got {self.alphabet_size}")

        self.window_lengths = [int(w) for w in self.window_lengths]
        if not self.window_lengths:
            raise ValueError("window_lengths must not be empty")
        for w in self.window_lengths:
            if w < 1 or w > MAX_WINDOW_LENGTH:
                raise ValueError(
                    f"window lengths must be in [1, {MAX_WINDOW_LENGTH}], got {w}"
                )
        if len(self.window_lengths) > 1 << HIGHEST_BIT:
            raise ValueError(
                f"at most {1 << HIGHEST_BIT} window lengths are supported, "
                f"got {len(self.window_lengths)}"
            )

        if self.blocks is not None and self.blocks < 1:
            raise ValueError(f"blocks must be >= 1, got {self.blocks}")

        bits = validate_layout(self.alphabet_size, self.max_word_length)
        if bits > 32:
            logger.warning(
                f"Keys need {bits} bits; bigram keys may collide beyond 32 bits"
            )


@dataclass
class SelectionConfig:
    """Feature selection configuration."""
    method: str = "chi2"
    chi_limit: float = 2.0
    p_value: Optional[float] = None
    limit: Optional[int] = None

    def __post_init__(self):
        """Validate selection configuration."""
        valid_method = {"chi2", "anova", "none"}
        if self.method not in valid_method:
            raise ValueError(f"method must be one of {valid_method}, got {self.method}")
        if self.p_value is not None and not 0 < self.p_value <= 1:
            raise ValueError(f"p_value must be in (0, 1], got {self.p_value}")
        if self.limit is not None and self.limit < 1:
            raise ValueError(f"limit must be >= 1, got {self.limit}")


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "%(asctime)s %(name)s %(levelname)s %(message)s"

    def __post_init__(self):
        """Validate logging configuration."""
        self.level = self.level.upper()
        valid_level = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level not in valid_level:
            raise ValueError(f"level must be one of {valid_level}, got {self.level}")

    def apply(self) -> None:
        """Configure the root logger."""
        logging.basicConfig(level=self.level, format=self.format)


@dataclass
class PipelineConfig:
    """Complete feature extraction configuration."""
    weasel: WeaselConfig
    selection: SelectionConfig = field(default_factory=SelectionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    word_length: Optional[int] = None

    def __post_init__(self):
        if self.word_length is not None and not 1 <= self.word_length <= self.weasel.max_word_length:
            raise ValueError(
                f"word_length must be in [1, {self.weasel.max_word_length}], "
                f"got {self.word_length}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PipelineConfig:
        """Create PipelineConfig from dictionary (e.g., from YAML)."""
        if 'weasel' not in data:
            raise ValueError("Missing required section: weasel")
        return cls(
            weasel=WeaselConfig(**(data['weasel'] or {})),
            selection=SelectionConfig(**(data.get('selection') or {})),
            logging=LoggingConfig(**(data.get('logging') or {})),
            word_length=data.get('word_length'),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> PipelineConfig:
        """Load configuration from YAML file."""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)
