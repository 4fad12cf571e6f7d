"""
Base Configuration Classes
==========================

Provides Pydantic-based configuration models with validation and loading
from dictionaries, JSON strings and JSON/YAML files.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ArangoConfigurationError, ConfigValidationError

logger = logging.getLogger(__name__)

T = TypeVar('T', bound='BaseConfig')

_YAML_SUFFIXES = {".yaml", ".yml"}


class BaseConfig(BaseModel, ABC):
    """
    Abstract base for all configuration models.

    Provides Pydantic validation and loading helpers. Instances are frozen;
    build a new instance to change a value. Subclasses implement
    validate_semantics() for rules that span several fields.
    """

    config_version: str = Field(default="1.0", description="Configuration schema version")
    source: str | None = Field(default=None, description="Configuration source identifier")

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        use_enum_values=True,
        arbitrary_types_allowed=False,
    )

    @abstractmethod
    def validate_semantics(self) -> list[str]:
        """
        Validate semantic consistency beyond schema validation.

        Returns:
            List of validation error messages (empty if valid)
        """

    def validate_full(self) -> None:
        """
        Perform semantic validation on top of the schema checks done at init.

        Raises:
            ConfigValidationError: If validation fails
        """
        semantic_errors = self.validate_semantics()
        if semantic_errors:
            raise ConfigValidationError("Semantic validation failed", semantic_errors)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary format, omitting unset optional values."""
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_dict(cls: type[T], data: dict[str, Any]) -> T:
        """
        Create configuration from dictionary.

        Args:
            data: Configuration data

        Returns:
            Configuration instance

        Raises:
            ConfigValidationError: If validation fails
        """
        try:
            instance = cls(**data)
        except ValidationError as e:
            raise ConfigValidationError(
                "Invalid configuration",
                [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()]
            ) from e
        instance.validate_full()
        return instance

    @classmethod
    def from_json(cls: type[T], json_str: str) -> T:
        """
        Create configuration from JSON string.

        Raises:
            ConfigValidationError: If the string is not valid JSON or validation fails
        """
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError("Invalid JSON format", [str(e)]) from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls: type[T], file_path: str | Path) -> T:
        """
        Load configuration from a JSON or YAML file.

        The format is chosen from the file suffix (``.yaml``/``.yml`` for
        YAML, anything else is parsed as JSON).

        Args:
            file_path: Path to configuration file

        Returns:
            Configuration instance with source set to the file path

        Raises:
            ConfigValidationError: If file cannot be read or parsed
        """
        path = Path(file_path)
        if not path.exists():
            raise ConfigValidationError(f"Configuration file not found: {path}", [])

        try:
            with open(path, encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise ConfigValidationError(f"Failed to read configuration file: {path}", [str(e)]) from e

        if path.suffix.lower() in _YAML_SUFFIXES:
            try:
                data = yaml.safe_load(content) or {}
            except yaml.YAMLError as e:
                raise ConfigValidationError("Invalid YAML format", [str(e)]) from e
        else:
            try:
                data = json.loads(content)
            except json.JSONDecodeError as e:
                raise ConfigValidationError("Invalid JSON format", [str(e)]) from e

        if not isinstance(data, dict):
            raise ArangoConfigurationError(f"Configuration file must contain a mapping: {path}")

        data.setdefault("source", str(path))
        logger.debug("Loading configuration from %s", path)
        return cls.from_dict(data)
