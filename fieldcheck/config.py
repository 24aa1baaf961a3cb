"""
Runtime settings for fieldcheck.

Settings are read from FIELDCHECK_* environment variables, optionally after
loading a dotenv file.
"""

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from fieldcheck.core.models import DEFAULT_SEPARATOR

ENV_PREFIX = "FIELDCHECK_"


class Settings(BaseModel):
    """
    Attributes:
        separator: Delimiter between a rule name and its arguments
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_format: "json" for structured logs, "text" for local development
        rules_path: Default rule configuration file for the command line
    """

    separator: str = Field(DEFAULT_SEPARATOR, min_length=1)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    rules_path: Path = Path("config/validation_rules.yaml")

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Settings":
        """
        Build settings from the environment.

        Args:
            env_file: Optional dotenv file loaded before reading variables;
                      values already present in the environment win

        Returns:
            Settings instance
        """
        if env_file is not None:
            load_dotenv(env_file, override=False)

        values = {}
        for field_name in cls.model_fields:
            raw = os.getenv(f"{ENV_PREFIX}{field_name.upper()}")
            if raw is not None:
                values[field_name] = raw.upper() if field_name == "log_level" else raw

        if "log_level" not in values and os.getenv("LOG_LEVEL"):
            values["log_level"] = os.getenv("LOG_LEVEL").upper()

        return cls(**values)
