"""Service configuration.

Defaults work out of the box; a YAML file (path given explicitly or through
LINGUALISTEN_CONFIG) overrides any of them.
"""
import os
from pathlib import Path
from typing import List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field

from schemas import DictationOptions

CONFIG_ENV_VAR = "LINGUALISTEN_CONFIG"


class Settings(BaseModel):
    """Runtime settings for the dictation service."""

    strict_case: bool = False
    strict_punctuation: bool = False
    answer_threshold: float = Field(default=0.8, ge=0, le=1)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    def dictation_options(
        self, strict_case: Optional[bool] = None, strict_punctuation: Optional[bool] = None
    ) -> DictationOptions:
        """Options for one comparison, falling back to the configured defaults."""
        return DictationOptions(
            strict_case=self.strict_case if strict_case is None else strict_case,
            strict_punctuation=self.strict_punctuation if strict_punctuation is None else strict_punctuation,
        )

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path]) -> "Settings":
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}

        return cls(**config_dict)


def load_settings(config_path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings from YAML.

    Args:
        config_path: Path to config file. If None, LINGUALISTEN_CONFIG is used;
            if that is unset too, defaults are returned.

    Raises:
        FileNotFoundError: If the config file does not exist
        pydantic.ValidationError: If a value is invalid
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR)
    if not config_path:
        return Settings()
    return Settings.from_yaml(config_path)
