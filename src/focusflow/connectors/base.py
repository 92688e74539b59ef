"""Connector protocol for presentation layers that drive the app root."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from focusflow.core import FocusFlow


@runtime_checkable
class Connector(Protocol):
    """Protocol that all user-facing front ends must implement."""

    @property
    def name(self) -> str: ...

    async def start(self, app: FocusFlow) -> None:
        """Start accepting user input. Returns when the user quits."""
        ...

    async def stop(self) -> None:
        """Gracefully stop the connector."""
        ...
