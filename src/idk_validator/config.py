"""
Configuration for the dictionary validator.

All corpus conventions (where the index lives, the category partition, the
chaining keywords, the length thresholds) are settings rather than
constants, so a fork of the dictionary with different directory names can be
validated without code changes.

Values resolve in this order: explicit keyword arguments, ``IDK_*``
environment variables, ``.env`` file, defaults. ``from_yaml`` layers a YAML
file on top of the environment.

Examples:
    >>> settings = ValidatorSettings(min_chaining_length=200)
    >>> settings.category_partition["git"]
    'Git Operations'
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from idk_validator.errors import ConfigError

# Corpus subdirectory -> canonical category label
DEFAULT_CATEGORY_PARTITION: dict[str, str] = {
    "core": "Core Commands",
    "development": "Development Commands",
    "documentation": "Documentation Commands",
    "quality-assurance": "Quality Assurance Commands",
    "workflow": "Workflow Commands",
    "git": "Git Operations",
}

# Verb fragments accepted as chaining commands when the quick reference
# table does not list them.
DEFAULT_FALLBACK_VERBS: list[str] = [
    "analyze", "debug", "optimize", "test", "document", "explain",
    "research", "review", "plan", "spec", "select", "create", "delete",
    "fix", "commit", "push", "gh", "pr", "comment",
]


class ValidatorSettings(BaseSettings):
    """Validator configuration.

    All fields can be set via ``IDK_*`` environment variables (e.g.
    ``IDK_INDEX_PATH``, ``IDK_LOG_LEVEL``). Mapping and list fields take JSON
    when given through the environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="IDK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # ── Corpus layout ────────────────────────────────────────────
    index_path: str = "information-dense-keywords.md"
    dictionary_root: str = "dictionary"
    category_partition: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_PARTITION)
    )

    # ── Schema ───────────────────────────────────────────────────
    index_title: str = "Information Dense Keywords Dictionary"
    index_required_sections: list[str] = Field(
        default_factory=lambda: ["Command Chaining", "Core Commands", "Quick Reference"]
    )
    entry_required_sections: list[str] = Field(
        default_factory=lambda: ["Example Prompts", "Expected Output Format"]
    )
    chaining_section: str = "Command Chaining"
    quick_reference_section: str = "Quick Reference"
    example_prompts_section: str = "Example Prompts"
    output_format_section: str = "Expected Output Format"
    min_example_prompts: int = Field(default=2, ge=0)
    min_output_format_length: int = Field(default=50, ge=0)

    # ── Chaining grammar ─────────────────────────────────────────
    sequential_keyword: str = "then"
    parallel_keyword: str = "and"
    min_chaining_length: int = Field(default=100, ge=0)
    fallback_verbs: list[str] = Field(default_factory=lambda: list(DEFAULT_FALLBACK_VERBS))
    vocabulary_matcher: Literal["exact", "substring", "fuzzy"] = "substring"
    fuzzy_threshold: float = Field(default=0.8, gt=0.0, le=1.0)

    # ── Links ────────────────────────────────────────────────────
    exempt_prefixes: list[str] = Field(
        default_factory=lambda: ["http://", "https://", "mailto:", "docs/"]
    )

    # ── Observability ────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_format: Literal["json", "console"] = "console"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("sequential_keyword", "parallel_keyword")
    @classmethod
    def _single_word(cls, value: str) -> str:
        value = value.strip()
        if not value or any(ch.isspace() for ch in value):
            raise ValueError("joining keywords must be a single word")
        return value

    @property
    def joining_keywords(self) -> tuple[str, str]:
        return (self.sequential_keyword, self.parallel_keyword)

    @property
    def canonical_categories(self) -> frozenset[str]:
        return frozenset(self.category_partition.values())

    @classmethod
    def from_yaml(cls, yaml_path: Path, **overrides: Any) -> ValidatorSettings:
        """Load settings from a YAML file.

        Args:
            yaml_path: Path to a YAML mapping of field names to values
            **overrides: Values that win over the file

        Returns:
            ValidatorSettings instance

        Raises:
            ConfigError: If the file is unreadable, not a mapping, or invalid
        """
        try:
            with open(yaml_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(
                f"Cannot read settings file: {yaml_path}",
                context={"path": str(yaml_path)},
                cause=exc,
            ) from exc

        if not isinstance(data, dict):
            raise ConfigError(
                f"Settings file must contain a mapping: {yaml_path}",
                context={"path": str(yaml_path)},
            )

        data.update(overrides)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorSettings:
        """Create settings from a dictionary, wrapping validation errors."""
        try:
            return cls(**data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid settings: {exc.error_count()} error(s)", cause=exc) from exc

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


def load_settings(config_path: Path | None = None, **overrides: Any) -> ValidatorSettings:
    """Build settings from an optional YAML file plus explicit overrides."""
    clean = {k: v for k, v in overrides.items() if v is not None}
    if config_path is not None:
        return ValidatorSettings.from_yaml(config_path, **clean)
    return ValidatorSettings.from_dict(clean)
