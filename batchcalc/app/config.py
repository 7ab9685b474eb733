"""
CalculatorConfig — Application Configuration

Immutable Pydantic model with the tunables of the calculator. Defaults
reproduce the reference behaviour (10 fractional digits, exact literals up
to 10 decimal places, "exit" to quit, results in output.txt).

A JSON configuration file is first checked against the calculator_config
JSON Schema, then loaded into the model.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Final, Union

from pydantic import BaseModel, Field, field_validator

from batchcalc.contracts import validate_calculator_config
from batchcalc.core.math import DECIMAL_PLACE_MAXIMUM, DECIMAL_SCALE

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_OUTPUT_PATH: Final[str] = "output.txt"
DEFAULT_EXIT_COMMAND: Final[str] = "exit"
DEFAULT_PROMPT: Final[str] = "> "
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# CONFIG MODEL
# =============================================================================


class CalculatorConfig(BaseModel):
    """
    Calculator configuration.

    Immutable (frozen=True): use model_copy(update=...) to derive variants.
    """

    # Numeric core
    decimal_scale: int = Field(
        DECIMAL_SCALE, ge=1, le=1000, description="Fractional digits of decimal results"
    )
    max_exact_decimal_places: int = Field(
        DECIMAL_PLACE_MAXIMUM,
        ge=0,
        le=18,
        description="Literals with more fractional digits are evaluated as decimals",
    )

    # Batch mode
    output_path: str = Field(DEFAULT_OUTPUT_PATH, min_length=1, description="Batch output file")

    # Interactive mode
    exit_command: str = Field(
        DEFAULT_EXIT_COMMAND, min_length=1, description="Command ending the REPL (any case)"
    )
    prompt: str = Field(DEFAULT_PROMPT, description="REPL prompt")

    # Logging
    log_level: str = Field(DEFAULT_LOG_LEVEL, description="Root logging level")

    model_config = {"frozen": True}

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level

    @field_validator("exit_command")
    @classmethod
    def validate_exit_command(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("exit_command must not be blank")
        return v.strip()

    def is_exit_command(self, line: str) -> bool:
        """Case-insensitive match against exit_command."""
        return line.strip().lower() == self.exit_command.lower()


# =============================================================================
# LOADING
# =============================================================================


def config_from_dict(data: Dict[str, Any]) -> CalculatorConfig:
    """
    Build a config from a plain dict after JSON Schema validation.

    Raises:
        jsonschema.ValidationError: if data violates the calculator_config schema
        pydantic.ValidationError: if data violates the model constraints
    """
    validate_calculator_config(data)
    return CalculatorConfig.model_validate(data)


def load_config(path: Union[str, Path]) -> CalculatorConfig:
    """
    Load configuration from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        CalculatorConfig

    Raises:
        FileNotFoundError: if the file does not exist
        json.JSONDecodeError: if the file is not valid JSON
        jsonschema.ValidationError: if the contents violate the schema
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    config = config_from_dict(data)
    logger.debug(f"Loaded config from {config_path}: {config.model_dump()}")
    return config
