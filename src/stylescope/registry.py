"""Thread-safe, order-preserving registry of scoped CSS keyed by scope token."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable

from stylescope.config import ScopeConfig
from stylescope.errors import RegistryError, ensure_scope
from stylescope.stylesheet.scoper import scope_css

__all__ = [
    "RegistryEntry",
    "StyleRegistry",
    "default_registry",
    "register_css",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryEntry:
    """One registered scope and its scoped CSS text."""

    scope: str
    css: str


@dataclass
class _Claim:
    """Marks a scope whose producer is running on thread *owner*."""

    owner: int
    done: threading.Event = field(default_factory=threading.Event)


class StyleRegistry:
    """Write-once-per-scope store of scoped CSS fragments.

    Entries are kept in first-insertion order.  An existing entry is never
    overwritten and there is no removal, so a scope token always maps to the
    text of its first registration.

    A single lock guards the stored entries and the set of scopes currently
    being produced.  The producer itself runs outside the lock: readers are
    never blocked by a slow producer, and a producer may register other
    scopes in the same registry.  Concurrent callers for a scope that is
    being produced wait for that producer instead of running their own.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._styles: dict[str, str] = {}
        self._order: list[str] = []
        self._pending: dict[str, _Claim] = {}

    # --- write ----------------------------------------------------------------

    def get_or_insert(self, scope: str, producer: Callable[[], str]) -> str:
        """Return the CSS registered for *scope*, producing it on first use.

        *producer* is called at most once per successful registration.  If it
        raises, the exception propagates and the registry is left unchanged;
        callers that were waiting on it then retry with their own producer.

        Raises ``RegistryError`` if *producer* asks for its own scope, which
        could otherwise never complete.
        """
        ensure_scope(scope)
        me = threading.get_ident()
        while True:
            with self._lock:
                existing = self._styles.get(scope)
                if existing is not None:
                    return existing
                claim = self._pending.get(scope)
                if claim is None:
                    claim = _Claim(me)
                    self._pending[scope] = claim
                    break
                if claim.owner == me:
                    raise RegistryError(
                        f"Producer for scope {scope!r} requested its own scope"
                    )
            logger.debug("Waiting for scope %s to be produced", scope)
            claim.done.wait()

        try:
            css = producer()
            with self._lock:
                self._styles[scope] = css
                self._order.append(scope)
        finally:
            with self._lock:
                del self._pending[scope]
            claim.done.set()
        logger.info("Registered styles for scope %s (%d chars)", scope, len(css))
        return css

    # --- read -----------------------------------------------------------------

    def snapshot(self) -> tuple[RegistryEntry, ...]:
        """Return all entries in first-insertion order as an immutable copy."""
        with self._lock:
            return tuple(RegistryEntry(s, self._styles[s]) for s in self._order)

    def styles(self) -> list[str]:
        """Return the registered CSS texts in first-insertion order."""
        return [entry.css for entry in self.snapshot()]

    def scopes(self) -> list[str]:
        """Return the registered scope tokens in first-insertion order."""
        with self._lock:
            return list(self._order)

    def get(self, scope: str, default: str | None = None) -> str | None:
        """Return the CSS registered for *scope*, or *default* if absent."""
        with self._lock:
            return self._styles.get(scope, default)

    def __contains__(self, scope: object) -> bool:
        with self._lock:
            return scope in self._styles

    def __len__(self) -> int:
        with self._lock:
            return len(self._order)

    def __repr__(self) -> str:
        with self._lock:
            return f"StyleRegistry(scopes={self._order!r})"


_default: StyleRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> StyleRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = StyleRegistry()
        return _default


def register_css(
    source: str,
    scope: str,
    registry: StyleRegistry | None = None,
    config: ScopeConfig | None = None,
) -> str:
    """Scope *source* under *scope* and register it, once per scope.

    Uses the process-wide registry unless *registry* is given.  Returns the
    registered CSS, which is the first registration's text if *scope* was
    already present.
    """
    target = registry if registry is not None else default_registry()
    return target.get_or_insert(scope, lambda: scope_css(source, scope, config))
