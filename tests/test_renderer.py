"""Unit tests for the template renderer."""

from __future__ import annotations

import pytest

from readmegen.core.config import PromptOption, PromptSpec
from readmegen.core.errors import InternalError, TemplateSyntaxError
from readmegen.core.renderer import apply_conditionals, check_markers, format_value, render
from readmegen.core.types import PromptType


def _multiselect(name: str, separator: str) -> PromptSpec:
    return PromptSpec(
        name=name,
        type=PromptType.MULTISELECT,
        message="?",
        options=[PromptOption(value="a", label="a")],
        separator=separator,
    )


class TestFormatValue:
    def test_string(self) -> None:
        assert format_value("hello") == "hello"

    def test_booleans(self) -> None:
        assert format_value(True) == "true"
        assert format_value(False) == "false"

    def test_none_is_empty(self) -> None:
        assert format_value(None) == ""

    def test_number(self) -> None:
        assert format_value(3) == "3"

    def test_list_uses_separator(self) -> None:
        assert format_value(["a", "b"], " / ") == "a / b"

    def test_empty_list(self) -> None:
        assert format_value([]) == ""


class TestSubstitution:
    def test_plain_values(self) -> None:
        result = render("Hi ${name}, welcome to ${place}.", {"name": "Ada", "place": "Paris"})
        assert result == "Hi Ada, welcome to Paris."

    def test_every_occurrence_replaced(self) -> None:
        assert render("${x}-${x}-${x}", {"x": "1"}) == "1-1-1"

    def test_unknown_placeholder_untouched(self) -> None:
        assert render("${known} ${unknown}", {"known": "k"}) == "k ${unknown}"

    def test_empty_answers_leave_template_untouched(self) -> None:
        template = "Nothing ${here} to see"
        assert render(template, {}) == template

    def test_key_matched_literally(self) -> None:
        # "." must not act as a wildcard.
        assert render("${a.b} ${axb}", {"a.b": "dot"}) == "dot ${axb}"

    def test_regex_special_characters_in_value(self) -> None:
        assert render("${v}", {"v": r"\1 $0 \g<0>"}) == r"\1 $0 \g<0>"

    def test_substituted_text_not_rescanned(self) -> None:
        assert render("${a}", {"a": "${b}", "b": "nope"}) == "${b}"

    def test_multiselect_separator(self) -> None:
        spec = _multiselect("tags", "|")
        assert render("${tags}", {"tags": ["a", "b"]}, [spec]) == "a|b"

    def test_multiselect_default_separator(self) -> None:
        assert render("${tags}", {"tags": ["a", "b"]}) == "a, b"

    def test_multiselect_empty(self) -> None:
        spec = _multiselect("tags", "|")
        assert render("[${tags}]", {"tags": []}, [spec]) == "[]"

    def test_boolean_and_none(self) -> None:
        assert render("${on}/${off}/${nil}", {"on": True, "off": False, "nil": None}) == (
            "true/false/"
        )


class TestConditionals:
    TEMPLATE = "a<!--IF:{x}-->B<!--ENDIF:{x}-->c"

    def test_true_keeps_content(self) -> None:
        assert render(self.TEMPLATE, {"x": True}) == "aBc"

    def test_false_removes_block(self) -> None:
        assert render(self.TEMPLATE, {"x": False}) == "ac"

    def test_absent_removes_block(self) -> None:
        assert render(self.TEMPLATE, {}) == "ac"

    @pytest.mark.parametrize("value", ["true", 1, "yes", ["x"]])
    def test_non_boolean_removes_block(self, value: object) -> None:
        assert render(self.TEMPLATE, {"x": value}) == "ac"

    def test_multiline_block(self) -> None:
        template = "top\n<!--IF:{docs}-->\n## Docs\nRead them.\n<!--ENDIF:{docs}-->\nbottom\n"
        assert render(template, {"docs": True}) == "top\n\n## Docs\nRead them.\n\nbottom\n"
        assert render(template, {"docs": False}) == "top\n\nbottom\n"

    def test_repeated_blocks_same_name(self) -> None:
        template = "<!--IF:{x}-->1<!--ENDIF:{x}-->-<!--IF:{x}-->2<!--ENDIF:{x}-->"
        assert render(template, {"x": True}) == "1-2"
        assert render(template, {"x": False}) == "-"

    def test_independent_blocks(self) -> None:
        template = "<!--IF:{a}-->A<!--ENDIF:{a}--><!--IF:{b}-->B<!--ENDIF:{b}-->"
        assert render(template, {"a": True, "b": False}) == "A"

    def test_whitespace_inside_markers(self) -> None:
        assert render("<!-- IF:{x} -->y<!-- ENDIF:{x} -->", {"x": True}) == "y"

    def test_substitution_inside_block(self) -> None:
        template = "<!--IF:{show}-->Name: ${name}<!--ENDIF:{show}-->"
        assert render(template, {"show": True, "name": "Ada"}) == "Name: Ada"

    def test_nested_same_name_rejected(self) -> None:
        template = "<!--IF:{x}-->a<!--IF:{x}-->b<!--ENDIF:{x}--><!--ENDIF:{x}-->"
        with pytest.raises(TemplateSyntaxError, match="cannot be nested"):
            render(template, {"x": True})

    def test_overlapping_blocks_rejected(self) -> None:
        template = "<!--IF:{a}-->1<!--IF:{b}-->2<!--ENDIF:{a}-->3<!--ENDIF:{b}-->"
        with pytest.raises(TemplateSyntaxError):
            render(template, {"a": True, "b": True})

    def test_nearest_end_marker_closes_block(self) -> None:
        text = "<!--IF:{x}-->a<!--ENDIF:{x}-->b<!--ENDIF:{x}-->"
        assert apply_conditionals(text, {"x": True}) == "ab<!--ENDIF:{x}-->"

    def test_mismatched_end_rejected(self) -> None:
        with pytest.raises(TemplateSyntaxError, match="closes a block"):
            check_markers("<!--IF:{a}-->x<!--ENDIF:{b}-->")

    def test_unclosed_block_reports_line(self) -> None:
        with pytest.raises(TemplateSyntaxError) as excinfo:
            render("one\ntwo <!--IF:{x}-->\nthree", {"x": True})
        assert excinfo.value.line == 2

    def test_stray_end_marker_rejected(self) -> None:
        with pytest.raises(TemplateSyntaxError, match="no matching"):
            render("text<!--ENDIF:{x}-->", {})


class TestRenderProperties:
    def test_idempotent_on_rendered_output(self) -> None:
        template = "# ${title}\n<!--IF:{a}-->kept<!--ENDIF:{a}-->\n<!--IF:{b}-->gone<!--ENDIF:{b}-->"
        once = render(template, {"title": "T", "a": True, "b": False})
        assert render(once, {}) == once

    def test_conditionals_run_after_substitution(self) -> None:
        # A value holding a complete block is evaluated by the second pass.
        template = "${snippet}"
        answers = {"snippet": "<!--IF:{flag}-->on<!--ENDIF:{flag}-->", "flag": True}
        assert render(template, answers) == "on"

    def test_unpaired_marker_in_answer_kept_literally(self) -> None:
        assert render("${a}", {"a": "<!--IF:{x}--> not closed"}) == "<!--IF:{x}--> not closed"

    def test_stray_marker_in_answer_does_not_break_blocks(self) -> None:
        template = "Notes: ${notes}\n<!--IF:{x}-->X<!--ENDIF:{x}-->\n"
        answers = {"notes": "see <!--ENDIF:{x}--> docs", "x": True}
        assert render(template, answers) == "Notes: see <!--ENDIF:{x}--> docs\nX\n"

    def test_error_line_counts_template_lines_only(self) -> None:
        with pytest.raises(TemplateSyntaxError) as excinfo:
            render("${a}\n<!--IF:{x}-->\n", {"a": "1\n2\n3\n4"})
        assert excinfo.value.line == 2

    def test_placeholder_split_by_block_stays_literal(self) -> None:
        template = "$<!--IF:{x}-->gone<!--ENDIF:{x}-->{a}"
        assert render(template, {"a": "A", "x": False}) == "${a}"


class TestContractViolations:
    def test_non_string_template(self) -> None:
        with pytest.raises(InternalError):
            render(None, {})  # type: ignore[arg-type]

    def test_non_mapping_answers(self) -> None:
        with pytest.raises(InternalError):
            render("x", None)  # type: ignore[arg-type]
