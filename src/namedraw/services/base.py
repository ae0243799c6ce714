"""BaseService — foundation for namedraw services.

Every service receives a :class:`Workspace` at construction time. The
workspace provides the session store, scheduler, random source, and
plugin hooks.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from namedraw.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes."""

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    def _dispatch_event(self, hook_name: str, payload: dict[str, Any], warnings: list[str]) -> None:
        """Call a plugin hook synchronously.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        hook = getattr(self._workspace.plugins.hook, hook_name)
        try:
            hook(**payload)
        except Exception:
            logger.debug("Hook %s failed", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed")
