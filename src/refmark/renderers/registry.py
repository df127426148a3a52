"""Named registry of markdown renderers.

Renderers are looked up by name once, when a processor is created. Loading a
renderer imports its third-party library; an ImportError there means the
renderer is unavailable. Names listed in RENDERER_FALLBACKS get one retry
under their fallback name before the failure becomes fatal.

Example:
    >>> renderer = load_renderer("mistune")
    >>> renderer.render("*hi*")
    '<p><em>hi</em></p>\\n'
"""

from __future__ import annotations

from collections.abc import Callable

from refmark.errors import RendererNotFoundError
from refmark.renderers.protocol import MarkdownRenderer
from refmark.utils.logger import get_logger

logger = get_logger(__name__)

RendererFactory = Callable[[], MarkdownRenderer]

# Registry of renderer factories
RENDERERS: dict[str, RendererFactory] = {}

# alias -> name tried when the alias cannot be loaded
RENDERER_FALLBACKS: dict[str, str] = {"patitas": "mistune"}


def register_renderer(name: str) -> Callable[[RendererFactory], RendererFactory]:
    """Decorator to register a renderer factory.

    Args:
        name: Renderer name for lookup

    Usage:
        @register_renderer("mistune")
        class MistuneRenderer:
            ...

    """

    def decorator(factory: RendererFactory) -> RendererFactory:
        RENDERERS[name] = factory
        return factory

    return decorator


def available_renderers() -> list[str]:
    """Registered renderer names, sorted."""
    return sorted(RENDERERS)


def _instantiate(name: str) -> MarkdownRenderer:
    factory = RENDERERS.get(name)
    if factory is None:
        available = ", ".join(available_renderers())
        raise RendererNotFoundError(name, f"unknown renderer (available: {available})")
    try:
        return factory()
    except ImportError as err:
        raise RendererNotFoundError(name, str(err)) from err


def load_renderer(name: str) -> MarkdownRenderer:
    """Create the renderer registered under ``name``.

    Raises:
        RendererNotFoundError: If neither ``name`` nor its fallback loads
    """
    try:
        return _instantiate(name)
    except RendererNotFoundError:
        fallback = RENDERER_FALLBACKS.get(name)
        if fallback is None:
            raise
        logger.warning("format: %s not found, using %s", name, fallback)
        return _instantiate(fallback)
