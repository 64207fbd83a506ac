from stylescope.scoping.rewriter import (
    scope_compound,
    scope_part,
    scope_selector,
    scope_selector_list,
)

__all__ = ["scope_compound", "scope_part", "scope_selector", "scope_selector_list"]
