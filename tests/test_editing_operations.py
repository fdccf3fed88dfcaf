from livecode_engine.buffer import BufferView
from livecode_engine.editing import (
    INDENT_UNIT,
    PAIRS,
    backspace,
    indent,
    insert_text,
    outdent,
    select_all,
    smart_newline,
    toggle_comment,
    type_character,
)


def make_view(marked: str) -> BufferView:
    """Build a view from text where ``|`` marks the caret and ``[`` ``]`` a selection."""

    if "|" in marked:
        offset = marked.index("|")
        return BufferView.caret_at(marked.replace("|", "", 1), offset)
    start = marked.index("[")
    end = marked.index("]") - 1
    return BufferView(marked.replace("[", "", 1).replace("]", "", 1), start, end)


def render(view: BufferView) -> str:
    text = view.text
    if not view.has_selection:
        return text[: view.selection_start] + "|" + text[view.selection_start :]
    return (
        text[: view.selection_start]
        + "["
        + view.selected_text
        + "]"
        + text[view.selection_end :]
    )


def test_indent_inserts_unit_at_caret() -> None:
    assert render(indent(make_view("ab|c"))) == "ab  |c"


def test_indent_replaces_single_line_selection() -> None:
    assert render(indent(make_view("a[bc]d"))) == "a  |d"


def test_indent_multi_line_selection_indents_each_line() -> None:
    view = indent(make_view("[one\n\ntwo]"))

    assert view.text == "  one\n\n  two"
    assert view.selected_text == view.text


def test_outdent_removes_one_unit_from_line_start() -> None:
    assert render(outdent(make_view("x\n    a|b"))) == "x\n  a|b"


def test_outdent_clamps_caret_to_line_start() -> None:
    assert render(outdent(make_view("  |  x"))) == "|  x"
    assert render(outdent(make_view(" |x"))) == " |x"


def test_indent_then_outdent_is_inverse_within_leading_whitespace() -> None:
    for marked in ("  |x = 1", "|  y", "a\n    |b"):
        original = make_view(marked)
        assert outdent(indent(original)).text == original.text


def test_smart_newline_expands_empty_bracket_pair() -> None:
    view = smart_newline(make_view("  f(|)"))

    assert render(view) == "  f(\n    |\n  )"


def test_smart_newline_after_opener_adds_one_level() -> None:
    assert render(smart_newline(make_view("items = [|"))) == "items = [\n  |"
    view = smart_newline(make_view("  if ok:  |"), openers=("{", "[", "(", ":"))
    assert render(view) == "  if ok:  \n    |"


def test_smart_newline_carries_indent_or_inserts_bare_newline() -> None:
    assert render(smart_newline(make_view("    x = 1|"))) == "    x = 1\n    |"
    assert render(smart_newline(make_view("x|"))) == "x\n|"


def test_type_character_auto_pairs_openers() -> None:
    for opener, closer in PAIRS.items():
        assert render(type_character(make_view("a |"), opener)) == f"a {opener}|{closer}"


def test_type_character_wraps_selection_and_keeps_it() -> None:
    assert render(type_character(make_view("x = [abc]"), "(")) == "x = ([abc])"


def test_quotes_are_not_paired_after_word_characters() -> None:
    assert render(type_character(make_view("don|"), "'")) == "don'|"
    assert render(type_character(make_view("$|"), '"', word_extras="_$")) == '$"|'


def test_typing_closer_skips_existing_closer() -> None:
    assert render(type_character(make_view("(a|)"), ")")) == "(a)|"
    assert render(type_character(make_view('"|"'), '"')) == '""|'


def test_quote_before_quote_pairs_unless_it_closes_a_string() -> None:
    assert render(type_character(make_view('|"x"'), '"')) == '"|""x"'
    assert render(type_character(make_view('"hi|"'), '"')) == '"hi"|'
    assert render(type_character(make_view("'|'"), "'")) == "''|"


def test_auto_pair_inverse_holds_before_existing_delimiters() -> None:
    for marked in ("|\"`'", "x |')", "( |)", '[ |"]', "|`", "| }"):
        original = make_view(marked)
        for opener in PAIRS:
            typed = type_character(original, opener)
            assert len(typed.text) == len(original.text) + 2, (marked, opener)
            assert backspace(typed) == original, (marked, opener)


def test_plain_character_replaces_selection() -> None:
    assert render(type_character(make_view("[abc]"), "z")) == "z|"


def test_auto_pair_then_backspace_is_inverse() -> None:
    original = make_view("call |")
    for opener in PAIRS:
        assert backspace(type_character(original, opener)) == original


def test_backspace_variants() -> None:
    assert render(backspace(make_view("|abc"))) == "|abc"
    assert render(backspace(make_view("ab|c"))) == "a|c"
    assert render(backspace(make_view("a[bc]d"))) == "a|d"
    assert render(backspace(make_view("x(|) y"))) == "x| y"
    assert render(backspace(make_view("x(|] y"))) == "x|] y"


def test_toggle_comment_three_lines_round_trip() -> None:
    original = make_view("[a = 1\n  b = 2\nc = 3]")

    commented = toggle_comment(original)

    assert commented.text == "# a = 1\n  # b = 2\n# c = 3"
    restored = toggle_comment(commented)
    assert restored.text == original.text


def test_toggle_comment_leaves_blank_lines_and_extends_to_whole_lines() -> None:
    view = make_view("x = [1\n\ny] = 2")

    commented = toggle_comment(view)

    assert commented.text == "# x = 1\n\n# y = 2"


def test_toggle_comment_mixed_lines_comments_everything() -> None:
    commented = toggle_comment(make_view("[# done\ntodo]"), marker="#")

    assert commented.text == "# # done\n# todo"


def test_toggle_comment_strips_marker_without_space() -> None:
    assert toggle_comment(make_view("//x|"), marker="//").text == "x"


def test_toggle_comment_keeps_caret_on_same_character() -> None:
    assert render(toggle_comment(make_view("  ab|c"))) == "  # ab|c"
    assert render(toggle_comment(make_view("  # ab|c"))) == "  ab|c"


def test_toggle_comment_on_blank_buffer_is_noop() -> None:
    view = make_view("   |")
    assert toggle_comment(view) == view


def test_operations_clamp_out_of_range_offsets() -> None:
    assert indent(BufferView("abc", 10, 10)).text == "abc" + INDENT_UNIT
    assert insert_text(BufferView("abc", 10, -4), "z").text == "z"


def test_select_all() -> None:
    view = select_all(make_view("ab|c"))
    assert view.selection == (0, 3)
