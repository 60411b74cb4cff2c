"""
Configuration for fixture graph builds.

Settings can be given directly, loaded from YAML, or read from pytest ini
options (``fixturekit_designator``, ``fixturekit_strict_annotations``).
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from fixturekit.graph.fields import DEFAULT_DESIGNATOR


class FixtureSetupConfig(BaseModel):
    """Settings that control how a fixture graph is built.

    Example:
        >>> config = FixtureSetupConfig(designator="Double")
        >>> config.designator
        'Double'
    """

    model_config = {"frozen": True, "extra": "forbid"}

    designator: str = Field(
        default=DEFAULT_DESIGNATOR,
        description="Class name suffix that marks a field as a managed fixture",
    )
    strict_annotations: bool = Field(
        default=False,
        description="Raise on field annotations that cannot be resolved instead of skipping them",
    )

    @field_validator("designator")
    @classmethod
    def designator_is_identifier(cls, v: str) -> str:
        """Validate that the designator could end a class name."""
        if not v or not ("X" + v).isidentifier():
            raise ValueError("Designator must be a non-empty identifier suffix")
        return v

    def to_yaml(self) -> str:
        """Serialize to YAML format."""
        result: str = yaml.dump(
            self.model_dump(mode="json"),
            default_flow_style=False,
            sort_keys=False,
        )
        return result


class FixtureConfigLoader:
    """Load FixtureSetupConfig from YAML files, dictionaries or pytest."""

    @classmethod
    def from_yaml(cls, path: str | Path) -> FixtureSetupConfig:
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            FixtureSetupConfig loaded from file
        """
        path = Path(path)
        if not path.exists():
            msg = f"Configuration file not found: {path}"
            raise FileNotFoundError(msg)

        with path.open() as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FixtureSetupConfig:
        """
        Create configuration from a dictionary.

        A top-level ``fixturekit`` key is unwrapped, so the same file can hold
        settings for other tools.
        """
        if "fixturekit" in data and isinstance(data["fixturekit"], dict):
            data = data["fixturekit"]
        return FixtureSetupConfig.model_validate(data)

    @classmethod
    def from_pytest_config(cls, config: Any) -> FixtureSetupConfig:
        """Read the plugin's ini options from a ``pytest.Config``."""
        designator = config.getini("fixturekit_designator") or DEFAULT_DESIGNATOR
        strict = config.getini("fixturekit_strict_annotations")
        return FixtureSetupConfig(designator=designator, strict_annotations=bool(strict))
