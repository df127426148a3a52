"""Exception classes for refmark.

Two tiers of failure exist. Reference lookups that fail are recoverable and
are turned into placeholders by the expander. A missing markdown renderer is
fatal and propagates to the caller.
"""

from __future__ import annotations


class RefmarkError(Exception):
    """Base exception for all refmark errors.

    Subclass this for specific error categories.
    """

    pass


class ReferenceNotFoundError(RefmarkError):
    """A name could not be resolved to a documentation item.

    Raised by reference tables and by NameResolver. The expander catches it
    and emits a placeholder plus a warning.
    """

    def __init__(self, name: str, message: str | None = None) -> None:
        """Initialize with the queried name.

        Args:
            name: The name that failed to resolve
            message: Description of the failure (defaults to a generic one)
        """
        self.name = name
        self.message = message or f"reference not found: {name}"
        super().__init__(self.message)


class RendererNotFoundError(RefmarkError):
    """The requested markdown renderer cannot be loaded.

    Without a renderer no field can be completed, so this is never caught
    inside refmark.
    """

    def __init__(self, renderer_name: str, message: str | None = None) -> None:
        """Initialize renderer error.

        Args:
            renderer_name: Name the renderer was requested under
            message: Extra detail, usually the underlying import failure
        """
        self.renderer_name = renderer_name
        detail = f": {message}" if message else ""
        super().__init__(f"cannot load formatter: {renderer_name}{detail}")


class ConfigError(RefmarkError):
    """Invalid processor configuration."""

    pass
