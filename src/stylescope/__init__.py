"""stylescope: scope CSS selectors to a unique token and collect the results."""

__version__ = "0.1.0"

from stylescope.config import ScopeConfig  # noqa: E402
from stylescope.errors import (  # noqa: E402
    CssSyntaxError,
    InvalidScopeError,
    ParseError,
    RegistryError,
    SelectorSyntaxError,
    StylescopeError,
)
from stylescope.registry import (  # noqa: E402
    RegistryEntry,
    StyleRegistry,
    default_registry,
    register_css,
)
from stylescope.scoping import scope_selector  # noqa: E402
from stylescope.selector import parse_selector_list  # noqa: E402
from stylescope.stylesheet import (  # noqa: E402
    ScopedStylesheet,
    scope_css,
    scope_stylesheet,
    split_rules,
)

__all__ = [
    "__version__",
    "ScopeConfig",
    "CssSyntaxError",
    "InvalidScopeError",
    "ParseError",
    "RegistryError",
    "SelectorSyntaxError",
    "StylescopeError",
    "RegistryEntry",
    "StyleRegistry",
    "default_registry",
    "register_css",
    "scope_selector",
    "parse_selector_list",
    "ScopedStylesheet",
    "scope_css",
    "scope_stylesheet",
    "split_rules",
]
