"""ContextVar-based render configuration for Grammarsmith.

Provides context-local configuration for diagnostic rendering using
Python's ContextVars (PEP 567). Set it once around a batch of rendering
calls; every render_diagnostic call in the context reads it.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit config per call
    text = render_diagnostics(diags, source, config=RenderConfig(show_hints=False))

    # Or for everything in a block
    with render_config_context(RenderConfig(sort_by_position=True)):
        text = render_diagnostics(diags, source)

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable diagnostic rendering configuration.

    Attributes:
        underline: Character drawn under the span (first cell is the caret
            under the start column)
        continuation: Marker appended when a span continues past its first line
        show_hints: Render ``= hint:`` lines
        show_summary: Append an ``N errors, M warnings emitted`` line
        sort_by_position: Render in span order instead of report order

    """

    underline: str = "^"
    continuation: str = "..."
    show_hints: bool = True
    show_summary: bool = False
    sort_by_position: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> RenderConfig:
        """Create RenderConfig from dictionary.

        Only includes keys that are valid RenderConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "show_hints": False,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.show_hints
            False

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get the active RenderConfig for this thread/context."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for the current context."""
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to the default configuration."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.
    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "RenderConfig",
    "get_render_config",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
]
