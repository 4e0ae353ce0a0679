"""
Configuration module.

Holds the delimiter set used by the tokenizer and the converter settings,
and loads them from a YAML file (with optional .env overrides).
"""
import os
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

DEFAULT_CONFIG_FILE = "config.yaml"
UNA_TAG = "UNA"
UNA_LENGTH = 9
DEFAULT_ESCAPE_CHAR = "?"


class OutputShape(str, Enum):
    """Shape of the generic fallback result."""
    FLAT = "flat"
    NESTED = "nested"


class DelimiterConfig(BaseModel):
    """
    The four service characters of an EDIFACT interchange.

    Defaults are the UNOA set: segment terminator ', element separator +,
    component separator : and release (escape) character ?.
    """
    model_config = ConfigDict(frozen=True)

    segment_terminator: str = "'"
    element_separator: str = "+"
    component_separator: str = ":"
    escape_char: str = DEFAULT_ESCAPE_CHAR
    # Informational only; numeric values are never reformatted.
    decimal_mark: str = "."

    @field_validator(
        "segment_terminator", "element_separator", "component_separator", "escape_char", "decimal_mark"
    )
    @classmethod
    def _single_printable(cls, value: str) -> str:
        if len(value) != 1 or not value.isprintable():
            raise ValueError(f"delimiter must be a single printable character, got {value!r}")
        return value

    @model_validator(mode="after")
    def _distinct(self) -> "DelimiterConfig":
        chars = self.delimiters()
        if len(set(chars)) != len(chars):
            raise ValueError(f"delimiters must be distinct, got {chars!r}")
        return self

    def delimiters(self) -> tuple:
        """Return the four structural characters in scan order."""
        return (
            self.segment_terminator,
            self.element_separator,
            self.component_separator,
            self.escape_char,
        )

    @classmethod
    def from_una(cls, una: str) -> "DelimiterConfig":
        """
        Build a config from a UNA service string advice.

        Layout: UNA, component separator, element separator, decimal mark,
        release character, reserved, segment terminator.

        Args:
            una: At least the 9 characters of the UNA segment

        Returns:
            DelimiterConfig for the rest of the interchange
        """
        if not una.startswith(UNA_TAG) or len(una) < UNA_LENGTH:
            raise ValueError(f"UNA service string advice must be {UNA_LENGTH} characters: {una!r}")

        release = una[6]
        if release == " ":
            # A blank release character means the sender uses none; keep the default.
            release = DEFAULT_ESCAPE_CHAR

        return cls(
            component_separator=una[3],
            element_separator=una[4],
            decimal_mark=una[5],
            escape_char=release,
            segment_terminator=una[8],
        )

    def to_una(self) -> str:
        """Render this config as a UNA segment."""
        return (
            f"{UNA_TAG}{self.component_separator}{self.element_separator}"
            f"{self.decimal_mark}{self.escape_char} {self.segment_terminator}"
        )


class ConverterConfig(BaseModel):
    """Settings for a Reader / Converter instance."""
    model_config = ConfigDict(frozen=True)

    delimiters: DelimiterConfig = Field(default_factory=DelimiterConfig)
    header_tag: str = "UNH"
    output_shape: OutputShape = OutputShape.FLAT
    honor_una: bool = True
    json_indent: Optional[int] = 2
    # Logging is left to the host application unless log_dir is set.
    log_dir: Optional[str] = None
    log_retention_days: int = Field(default=10, ge=1)

    @field_validator("header_tag")
    @classmethod
    def _valid_tag(cls, value: str) -> str:
        if not (2 <= len(value) <= 3 and value.isalnum()):
            raise ValueError(f"header tag must be 2-3 alphanumeric characters, got {value!r}")
        return value


def load_config(config_path: Optional[Union[str, Path]] = None) -> ConverterConfig:
    """
    Load converter configuration from a YAML file.

    The file path comes from the argument, else the EDIFACT_CONFIG
    environment variable, else config.yaml. A .env file in the working
    directory is loaded first. EDIFACT_OUTPUT_SHAPE overrides output_shape
    and EDIFACT_LOG_DIR overrides log_dir.

    Args:
        config_path: Path to the YAML file

    Returns:
        Validated ConverterConfig
    """
    load_dotenv(Path.cwd() / ".env")

    path = config_path or os.getenv("EDIFACT_CONFIG", DEFAULT_CONFIG_FILE)
    config_file = Path(path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(config_file, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")

    shape_override = os.getenv("EDIFACT_OUTPUT_SHAPE")
    if shape_override:
        data["output_shape"] = shape_override.strip().lower()

    log_dir_override = os.getenv("EDIFACT_LOG_DIR")
    if log_dir_override:
        data["log_dir"] = log_dir_override.strip()

    try:
        return ConverterConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {path}: {e}") from e
