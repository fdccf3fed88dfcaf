from livecode_engine.lexer import (
    JAVASCRIPT,
    PYTHON,
    Token,
    TokenType,
    join_tokens,
    tokenize,
    tokenize_lines,
)


def make_pairs(text: str, profile=PYTHON) -> list[tuple[TokenType, str]]:
    return [(token.type, token.value) for token in tokenize(text, profile)]


def test_tokenize_is_lossless_for_mixed_input() -> None:
    samples = [
        "",
        "def f(x):\n    return x + 1  # done\n",
        'print("unterminated\nnext = 1',
        '"""doc\nstring""" 0x1F 3.14e-2 .5',
        "a <<= b >>> c",
        "\tété = '\\''",
    ]
    for text in samples:
        assert join_tokens(tokenize(text)) == text
        assert join_tokens(tokenize(text, JAVASCRIPT)) == text


def test_javascript_scenario_classification() -> None:
    pairs = make_pairs('const x = 42; // hi\nconsole.log(`a\nb`);', JAVASCRIPT)

    assert (TokenType.KEYWORD, "const") in pairs
    assert (TokenType.NUMBER, "42") in pairs
    assert (TokenType.COMMENT, "// hi") in pairs
    assert (TokenType.BUILTIN, "console") in pairs
    assert (TokenType.FUNCTION, "log") in pairs
    assert (TokenType.STRING, "`a\nb`") in pairs


def test_python_keyword_constant_builtin_function_order() -> None:
    pairs = make_pairs("if None: print(greet(True))")

    assert pairs[0] == (TokenType.KEYWORD, "if")
    assert (TokenType.CONSTANT, "None") in pairs
    assert (TokenType.BUILTIN, "print") in pairs
    assert (TokenType.FUNCTION, "greet") in pairs
    assert (TokenType.CONSTANT, "True") in pairs


def test_line_comment_stops_before_newline() -> None:
    tokens = tokenize("# note\nx")

    assert tokens[0] == Token(TokenType.COMMENT, "# note")
    assert tokens[1] == Token(TokenType.PLAIN, "\n")
    assert tokens[2] == Token(TokenType.IDENTIFIER, "x")


def test_unterminated_block_comment_runs_to_end() -> None:
    tokens = tokenize("a /* open\nstill", JAVASCRIPT)

    assert tokens[-1] == Token(TokenType.COMMENT, "/* open\nstill")


def test_quoted_string_does_not_span_newlines() -> None:
    tokens = tokenize("'abc\ndef'")

    assert tokens[0] == Token(TokenType.STRING, "'abc")
    assert tokens[1] == Token(TokenType.PLAIN, "\n")


def test_escaped_quote_stays_inside_string() -> None:
    tokens = tokenize(r'"a\"b" c')

    assert tokens[0] == Token(TokenType.STRING, r'"a\"b"')


def test_template_string_spans_lines_and_may_be_unterminated() -> None:
    tokens = tokenize('x = """one\ntwo')

    assert tokens[-1] == Token(TokenType.STRING, '"""one\ntwo')


def test_number_forms() -> None:
    assert make_pairs("0xFF") == [(TokenType.NUMBER, "0xFF")]
    assert make_pairs("1.5e+10") == [(TokenType.NUMBER, "1.5e+10")]
    assert make_pairs(".25") == [(TokenType.NUMBER, ".25")]
    assert make_pairs("1.2.3")[0] == (TokenType.NUMBER, "1.2")
    # An exponent marker with no digits is not part of the number.
    assert make_pairs("2e")[0] == (TokenType.NUMBER, "2")


def test_operator_runs_are_capped_at_three_characters() -> None:
    pairs = make_pairs("a====b")

    assert (TokenType.OPERATOR, "===") in pairs
    assert (TokenType.OPERATOR, "=") in pairs


def test_brackets_and_fallback_characters() -> None:
    pairs = make_pairs("( ]{ ;")

    assert pairs == [
        (TokenType.BRACKET, "("),
        (TokenType.PLAIN, " "),
        (TokenType.BRACKET, "]"),
        (TokenType.BRACKET, "{"),
        (TokenType.PLAIN, " "),
        (TokenType.PLAIN, ";"),
    ]


def test_javascript_identifiers_accept_dollar() -> None:
    pairs = make_pairs("$el = _x", JAVASCRIPT)

    assert pairs[0] == (TokenType.IDENTIFIER, "$el")


def test_tokenize_lines_splits_multiline_tokens() -> None:
    lines = tokenize_lines('a = """x\ny"""\nb')

    assert len(lines) == 3
    assert "".join(token.value for token in lines[1]) == 'y"""'
    assert lines[1][0].type is TokenType.STRING
    assert "\n".join(join_tokens(line) for line in lines) == 'a = """x\ny"""\nb'
