import pytest

from notes.markup import FormatEdit, Table, apply_format, parse_for_editor
from notes.markup.formats import TABLE_TEMPLATE


class TestInlineFormats:
    def test_wrap_selection(self):
        assert apply_format("hello world", 0, 5, "bold") == FormatEdit("**hello** world", 2, 7)

    @pytest.mark.parametrize(
        "fmt, expected",
        [
            ("italic", FormatEdit("_x_", 1, 2)),
            ("underline", FormatEdit("__x__", 2, 3)),
            ("strikethrough", FormatEdit("~~x~~", 2, 3)),
            ("code", FormatEdit("`x`", 1, 2)),
        ],
    )
    def test_wrap_formats(self, fmt, expected):
        assert apply_format("x", 0, 1, fmt) == expected

    def test_collapsed_selection_inserts_placeholder(self):
        assert apply_format("ab", 1, 1, "bold") == FormatEdit("a**text**b", 3, 7)

    def test_reversed_selection(self):
        assert apply_format("hello", 5, 0, "bold").text == "**hello**"

    def test_active_format_is_removed(self):
        assert apply_format("**hello** world", 2, 7, "bold") == FormatEdit("hello world", 0, 5)
        assert apply_format("~~x~~", 2, 3, "strikethrough") == FormatEdit("x", 0, 1)

    def test_remove_at_cursor(self):
        assert apply_format("_abc_", 2, 2, "italic") == FormatEdit("abc", 1, 1)

    def test_remove_inner_format_keeps_outer(self):
        text = "**bold _italic_ text**"
        start = text.index("italic")
        edit = apply_format(text, start, start + len("italic"), "italic")
        assert edit.text == "**bold italic text**"
        assert edit.text[edit.selection_start:edit.selection_end] == "italic"

    def test_code_toggles_off(self):
        assert apply_format("`x`", 1, 2, "code") == FormatEdit("x", 0, 1)


class TestLinks:
    def test_selection_becomes_label(self):
        edit = apply_format("see docs", 4, 8, "link", url=" https://d.io ")
        assert edit == FormatEdit("see [docs](https://d.io)", 5, 9)

    def test_collapsed_selection_uses_placeholder_label(self):
        assert apply_format("", 0, 0, "link", url="/x").text == "[link text](/x)"

    def test_missing_url(self):
        with pytest.raises(ValueError):
            apply_format("x", 0, 1, "link")
        with pytest.raises(ValueError):
            apply_format("x", 0, 1, "link", url="   ")


class TestLists:
    def test_collapsed_inserts_item(self):
        assert apply_format("", 0, 0, "bullet") == FormatEdit("- Item", 2, 6)
        assert apply_format("", 0, 0, "checkbox") == FormatEdit("- [ ] Item", 6, 10)
        assert apply_format("", 0, 0, "numbered") == FormatEdit("1. Item", 3, 7)

    def test_prefixes_each_selected_line(self):
        assert apply_format("a\nb", 0, 3, "bullet") == FormatEdit("- a\n- b", 0, 7)
        assert apply_format("a\nb", 0, 3, "numbered").text == "1. a\n2. b"
        assert apply_format("a\nb", 0, 3, "checkbox").text == "- [ ] a\n- [ ] b"


class TestColor:
    def test_insert_tag(self):
        assert apply_format("hello", 0, 0, "color", color="red") == FormatEdit(
            "[!color:red] hello", 13, 13
        )

    def test_same_color_toggles_off(self):
        assert apply_format("[!color:red] hello", 13, 13, "color", color="red") == FormatEdit(
            "hello", 0, 0
        )

    def test_other_color_replaces_tag(self):
        assert apply_format("[!color:red] hello", 13, 13, "color", color="blue") == FormatEdit(
            "[!color:blue] hello", 14, 14
        )

    @pytest.mark.parametrize("color", [None, "", "light blue", "red]"])
    def test_invalid_color(self, color):
        with pytest.raises(ValueError):
            apply_format("x", 0, 0, "color", color=color)


class TestJustify:
    def test_center(self):
        assert apply_format("hello", 2, 2, "justify-center") == FormatEdit("-:- hello", 6, 6)

    def test_center_toggles_off(self):
        assert apply_format("-:- hello", 6, 6, "justify-center") == FormatEdit("hello", 2, 2)

    def test_right_replaces_center(self):
        assert apply_format("-:- hello", 6, 6, "justify-right") == FormatEdit("--: hello", 6, 6)

    def test_left_clears_prefix(self):
        assert apply_format("--: hello", 5, 5, "justify-left") == FormatEdit("hello", 1, 1)

    def test_only_current_line_changes(self):
        assert apply_format("a\nhello", 4, 4, "justify-center") == FormatEdit("a\n-:- hello", 8, 8)


class TestTable:
    def test_insert_selects_first_header(self):
        edit = apply_format("", 0, 0, "table")
        assert edit.text == TABLE_TEMPLATE
        assert edit.text[edit.selection_start:edit.selection_end] == "Column 1"

    def test_insert_starts_on_new_line(self):
        edit = apply_format("abc", 3, 3, "table")
        assert edit.text == "abc\n" + TABLE_TEMPLATE
        assert edit.text[edit.selection_start:edit.selection_end] == "Column 1"

    def test_template_parses_as_table(self):
        assert parse_for_editor(TABLE_TEMPLATE) == [
            Table(["Column 1", "Column 2", "Column 3"], [["Item 1", "Item 2", "Item 3"]])
        ]


def test_unknown_format():
    with pytest.raises(ValueError, match="Unknown format"):
        apply_format("x", 0, 1, "blink")
