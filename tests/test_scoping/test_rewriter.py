"""Tests for the scoping rewriter."""

import re

import pytest

from stylescope.config import ScopeConfig
from stylescope.errors import InvalidScopeError, SelectorSyntaxError
from stylescope.scoping import (
    scope_compound,
    scope_part,
    scope_selector,
    scope_selector_list,
)
from stylescope.selector import PartKind, parse_selector_list


# ---------------------------------------------------------------------------
# Per-part policy
# ---------------------------------------------------------------------------


class TestPartPolicy:
    def test_class(self):
        assert scope_selector(".btn", "sc_1") == ".sc_1_btn"

    def test_id(self):
        assert scope_selector("#hdr", "s") == "#s_hdr"

    def test_element(self):
        assert scope_selector("div", "sc_1") == 'div[data-scope="sc_1"]'

    def test_universal_unchanged(self):
        assert scope_selector("*", "s") == "*"

    def test_attribute_verbatim(self):
        assert scope_selector('[type="text"]', "s") == '[type="text"]'

    def test_pseudo_verbatim(self):
        assert scope_selector(":hover", "s") == ":hover"
        assert scope_selector("::before", "s") == "::before"

    def test_element_with_class(self):
        assert (
            scope_selector("div.container", "s")
            == 'div[data-scope="s"].s_container'
        )

    def test_element_id_pseudo(self):
        assert (
            scope_selector("div#label:hover", "s")
            == 'div[data-scope="s"]#s_label:hover'
        )

    def test_element_with_attribute(self):
        assert (
            scope_selector('input[type="text"]', "s")
            == 'input[data-scope="s"][type="text"]'
        )

    def test_pseudo_moved_after_other_parts(self):
        assert scope_selector("a:hover.b", "s") == 'a[data-scope="s"].s_b:hover'

    def test_functional_pseudo_argument_not_scoped(self):
        assert scope_selector(".a:not(.b)", "s") == ".s_a:not(.b)"

    def test_universal_with_class(self):
        assert scope_selector("*.a", "s") == "*.s_a"

    def test_duplicate_classes_each_scoped(self):
        assert scope_selector(".a.a", "s") == ".s_a.s_a"

    def test_escaped_class_kept_escaped(self):
        assert scope_selector(r".md\:flex", "s") == r".s_md\:flex"


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------


class TestStructure:
    def test_child_combinator(self):
        assert (
            scope_selector("div.container > span#label", "sc_t")
            == 'div[data-scope="sc_t"].sc_t_container > span[data-scope="sc_t"]#sc_t_label'
        )

    def test_whitespace_normalized(self):
        assert scope_selector(".a   >\n   .b", "s") == ".s_a > .s_b"
        assert scope_selector(".a\n\t.b", "s") == ".s_a .s_b"
        assert scope_selector(".a+.b~.c", "s") == ".s_a + .s_b ~ .s_c"

    def test_list(self):
        assert scope_selector(".a, .b, #c", "s") == ".s_a, .s_b, #s_c"

    def test_list_spacing_normalized(self):
        assert scope_selector(".a ,.b", "s") == ".s_a, .s_b"

    def test_pseudo_with_class(self):
        assert scope_selector(".btn:hover", "s") == ".s_btn:hover"

    def test_universal_child(self):
        assert scope_selector("* > .a", "s") == "* > .s_a"


class TestProperties:
    SAMPLES = [
        "div.container > span#label",
        "ul li + li ~ li > a:hover",
        '.a[data-x="1"] .b::before, #c',
        "nav > *:first-child .item.active",
        "a:not(.x) + b[rel~=next]",
    ]

    @pytest.mark.parametrize("text", SAMPLES)
    def test_deterministic(self, text):
        assert scope_selector(text, "sc_9") == scope_selector(text, "sc_9")

    @pytest.mark.parametrize("text", SAMPLES)
    def test_combinators_preserved(self, text):
        before = parse_selector_list(text)
        after = parse_selector_list(scope_selector(text, "sc_9"))
        assert [s.combinators for s in before] == [s.combinators for s in after]

    @pytest.mark.parametrize("text", SAMPLES)
    def test_attributes_and_pseudos_preserved(self, text):
        before = parse_selector_list(text)
        after = parse_selector_list(scope_selector(text, "sc_9"))
        marker = '[data-scope="sc_9"]'
        for sel_before, sel_after in zip(before, after):
            for step_before, step_after in zip(sel_before.steps, sel_after.steps):
                attrs = tuple(a for a in step_after.compound.attributes if a != marker)
                assert attrs == step_before.compound.attributes
                assert step_after.compound.pseudos == step_before.compound.pseudos

    @pytest.mark.parametrize("text", SAMPLES)
    def test_every_name_prefixed_once(self, text):
        before = parse_selector_list(text)
        after = parse_selector_list(scope_selector(text, "sc_9"))
        for sel_before, sel_after in zip(before, after):
            for step_before, step_after in zip(sel_before.steps, sel_after.steps):
                cb, ca = step_before.compound, step_after.compound
                assert ca.classes == tuple(f"sc_9_{c}" for c in cb.classes)
                if cb.id is not None:
                    assert ca.id == f"sc_9_{cb.id}"
                markers = ca.attributes.count('[data-scope="sc_9"]')
                expected = 1 if cb.element not in (None, "*") else 0
                assert markers == expected

    def test_scope_appears_once_per_name(self):
        out = scope_selector(".a.b#c d", "s")
        assert len(re.findall(r"[.#]s_", out)) == 3
        assert out.count('[data-scope="s"]') == 1


# ---------------------------------------------------------------------------
# Entry points and configuration
# ---------------------------------------------------------------------------


class TestEntryPoints:
    def test_scope_compound(self):
        compound = parse_selector_list("a.b:hover").selectors[0].steps[0].compound
        assert scope_compound(compound, "s") == 'a[data-scope="s"].s_b:hover'

    def test_scope_selector_list(self):
        selectors = parse_selector_list(".a > .b")
        assert scope_selector_list(selectors, "s") == ".s_a > .s_b"

    def test_empty_scope_rejected_before_parsing(self):
        with pytest.raises(InvalidScopeError):
            scope_selector("a >", "")

    def test_empty_scope_rejected_for_parsed_list(self):
        with pytest.raises(InvalidScopeError):
            scope_selector_list(parse_selector_list(".a"), "")

    def test_parse_error_propagates(self):
        with pytest.raises(SelectorSyntaxError):
            scope_selector(".a >", "s")

    def test_parsed_parts_untouched(self):
        selectors = parse_selector_list(".a")
        scope_selector_list(selectors, "s")
        part = selectors.selectors[0].steps[0].compound.parts[0]
        assert part.kind is PartKind.CLASS
        assert part.value == "a"


class TestConfig:
    def test_custom_attribute(self):
        config = ScopeConfig(attribute="data-v")
        assert scope_selector("p", "x1", config) == 'p[data-v="x1"]'

    def test_custom_separator(self):
        config = ScopeConfig(separator="-")
        assert scope_selector(".btn#main", "x1", config) == ".x1-btn#x1-main"

    def test_scope_part_defaults_when_config_omitted(self):
        compound = parse_selector_list("p.btn").selectors[0].steps[0].compound
        element, klass = compound.parts
        assert scope_part(element, "x1") == 'p[data-scope="x1"]'
        assert scope_part(element, "x1", None) == 'p[data-scope="x1"]'
        assert scope_part(klass, "x1", ScopeConfig(separator="-")) == ".x1-btn"
