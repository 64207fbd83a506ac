from __future__ import annotations

from dataclasses import dataclass, field

# Conditional group at-rules: their blocks hold ordinary style rules.
SCOPED_AT_RULES = frozenset(
    {
        "media",
        "supports",
        "container",
        "layer",
        "document",
        "-moz-document",
        "scope",
        "starting-style",
    }
)


@dataclass(frozen=True)
class ScopeConfig:
    attribute: str = "data-scope"  # marker attribute for element selectors
    separator: str = "_"  # joins the scope token and a class/id name
    scoped_at_rules: frozenset[str] = field(default=SCOPED_AT_RULES)
    global_selectors: frozenset[str] = field(default=frozenset({":root"}))

    def prefixed(self, scope: str, name: str) -> str:
        """Return the scoped form of a class or id *name*."""
        return f"{scope}{self.separator}{name}"

    def marker(self, scope: str) -> str:
        """Return the attribute selector appended to element selectors."""
        return f'[{self.attribute}="{scope}"]'


DEFAULT_CONFIG = ScopeConfig()
