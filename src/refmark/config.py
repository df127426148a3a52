"""Processor configuration for refmark.

Usage:
    from refmark.config import ProcessorConfig

    config = ProcessorConfig(format="mistune", package_prefix="mypkg")
    processor = create_processor(config, table)

    # From a loaded settings file
    config = ProcessorConfig.from_dict({"format": "plain", "unknown_key": 1})

"""

from __future__ import annotations

from dataclasses import dataclass, fields

from refmark.errors import ConfigError

PLAIN_FORMAT = "plain"


@dataclass(frozen=True, slots=True)
class ProcessorConfig:
    """Immutable processor configuration.

    Attributes:
        format: ``"plain"`` for reference expansion only, otherwise the name
            of a registered markdown renderer
        backtick_references: Treat `name` spans as references. None picks the
            default for the format: on for renderers, off for plain.
        package_prefix: Global prefix tried when a bare name does not resolve
        code_language: Language passed to the highlighter for code blocks

    """

    format: str = PLAIN_FORMAT
    backtick_references: bool | None = None
    package_prefix: str | None = None
    code_language: str = "python"

    def __post_init__(self) -> None:
        if not isinstance(self.format, str) or not self.format:
            raise ConfigError(f"format must be a non-empty string, got {self.format!r}")
        if self.package_prefix is not None and not self.package_prefix.strip("."):
            raise ConfigError(f"invalid package prefix {self.package_prefix!r}")

    @property
    def is_plain(self) -> bool:
        return self.format == PLAIN_FORMAT

    @property
    def backtick_enabled(self) -> bool:
        """Back-tick references, with the per-format default applied."""
        if self.backtick_references is None:
            return not self.is_plain
        return self.backtick_references

    @classmethod
    def from_dict(cls, config_dict: dict) -> ProcessorConfig:
        """Create ProcessorConfig from dictionary.

        Only includes keys that are valid ProcessorConfig fields; unknown
        keys are silently ignored.

        Example:
            >>> config = ProcessorConfig.from_dict({
            ...     "format": "markdown",
            ...     "package_prefix": "pl",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.backtick_enabled
            True

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


__all__ = ["PLAIN_FORMAT", "ProcessorConfig"]
