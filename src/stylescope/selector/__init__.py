from stylescope.selector.parser import parse_selector_list
from stylescope.selector.model import (
    Combinator,
    CompoundSelector,
    PartKind,
    Selector,
    SelectorList,
    SimpleSelector,
    Step,
)

__all__ = [
    "parse_selector_list",
    "Combinator",
    "CompoundSelector",
    "PartKind",
    "Selector",
    "SelectorList",
    "SimpleSelector",
    "Step",
]
