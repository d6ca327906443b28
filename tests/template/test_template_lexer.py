"""
Тесты для лексического анализатора шаблонов.

Проверяет токенизацию всех элементов шаблонов:
- обычный текст
- подстановки {{ ... }}
- директивы {% ... %}
- литералы, имена, ключевые слова и операторы
"""

import pytest

from templex.config import LexerConfig
from templex.template import (
    Keyword,
    LexerState,
    TemplateLexer,
    Token,
    TokenType,
    tokenize_template,
)

T = TokenType


def kinds(text, config=None):
    return [token.kind for token in tokenize_template(text, config)]


class TestNeutralText:
    """Текст вне скобочных конструкций."""

    def test_empty_template(self):
        """Пустой шаблон не даёт ни одного токена."""
        assert tokenize_template("") == []

    def test_plain_text(self):
        text = "Hello, world!"
        tokens = tokenize_template(text)

        assert len(tokens) == 1
        assert tokens[0].type == T.TEXT_CONTENT
        assert tokens[0].value == text
        assert tokens[0].position == 0
        assert tokens[0].line == 1
        assert tokens[0].column == 1

    def test_multiline_text_with_closing_braces(self):
        """Закрывающие скобки и проценты вне конструкций: обычный текст."""
        text = "a } b %} c }}\n  d"
        assert kinds(text) == [(T.TEXT_CONTENT, text)]

    def test_whitespace_is_preserved_in_text(self):
        assert kinds("  \t\n ") == [(T.TEXT_CONTENT, "  \t\n ")]

    def test_text_is_split_before_brace(self):
        """Текст перед '{' выдаётся отдельным токеном, скобка остаётся следующему вызову."""
        lexer = TemplateLexer("ab{{ x }}")

        first = lexer.next_token()
        assert first.kind == (T.TEXT_CONTENT, "ab")
        assert lexer.state is LexerState.NEUTRAL
        assert lexer.chars.peek() == "{"

        second = lexer.next_token()
        assert second.kind == (T.BEGIN_SUBSTITUTION, None)
        assert second.position == 2

    def test_text_after_region(self):
        assert kinds("{{ x }} tail") == [
            (T.BEGIN_SUBSTITUTION, None),
            (T.VARIABLE_NAME, "x"),
            (T.END_SUBSTITUTION, None),
            (T.TEXT_CONTENT, " tail"),
        ]


class TestSubstitution:

    def test_simple_substitution(self):
        assert kinds("{{ x }}") == [
            (T.BEGIN_SUBSTITUTION, None),
            (T.VARIABLE_NAME, "x"),
            (T.END_SUBSTITUTION, None),
        ]

    def test_without_inner_whitespace(self):
        assert kinds("{{name}}") == [
            (T.BEGIN_SUBSTITUTION, None),
            (T.VARIABLE_NAME, "name"),
            (T.END_SUBSTITUTION, None),
        ]

    def test_number_literal(self):
        assert kinds("{{ 123 }}") == [
            (T.BEGIN_SUBSTITUTION, None),
            (T.NUMBER_LITERAL, 123),
            (T.END_SUBSTITUTION, None),
        ]

    def test_number_literal_int32_max(self):
        tokens = tokenize_template("{{ 2147483647 }}")
        assert tokens[1].kind == (T.NUMBER_LITERAL, 2147483647)

    def test_string_literal_strips_quotes(self):
        assert kinds('{{ "hi" }}') == [
            (T.BEGIN_SUBSTITUTION, None),
            (T.STRING_LITERAL, "hi"),
            (T.END_SUBSTITUTION, None),
        ]

    def test_string_literal_keeps_inner_content_verbatim(self):
        """Внутри строки пробелы и скобки не интерпретируются, экранирования нет."""
        tokens = tokenize_template('{{ "  a }} %} \\n " }}')
        assert tokens[1].kind == (T.STRING_LITERAL, "  a }} %} \\n ")

    def test_empty_string_literal(self):
        assert tokenize_template('{{ "" }}')[1].kind == (T.STRING_LITERAL, "")

    def test_backslash_does_not_escape_quote(self):
        tokens = tokenize_template('{{ "a\\" b }}')
        assert tokens[1].kind == (T.STRING_LITERAL, "a\\")
        assert tokens[2].kind == (T.VARIABLE_NAME, "b")


class TestDirective:

    def test_if_keyword(self):
        assert kinds("{% if %}") == [
            (T.BEGIN_DIRECTIVE, None),
            (T.KEYWORD, Keyword.IF),
            (T.END_DIRECTIVE, None),
        ]

    def test_endfor_keyword(self):
        assert kinds("{% endfor %}") == [
            (T.BEGIN_DIRECTIVE, None),
            (T.KEYWORD, Keyword.ENDFOR),
            (T.END_DIRECTIVE, None),
        ]

    @pytest.mark.parametrize("word,keyword", [
        ("for", Keyword.FOR),
        ("if", Keyword.IF),
        ("then", Keyword.THEN),
        ("else", Keyword.ELSE),
        ("elseif", Keyword.ELSEIF),
        ("endfor", Keyword.ENDFOR),
        ("endif", Keyword.ENDIF),
    ])
    def test_all_keywords(self, word, keyword):
        assert kinds(f"{{% {word} %}}")[1] == (T.KEYWORD, keyword)

    @pytest.mark.parametrize("word", ["EndFor", "IF", "For", "iff", "endif2", "elsif"])
    def test_keyword_match_is_exact_and_case_sensitive(self, word):
        assert kinds(f"{{% {word} %}}")[1] == (T.VARIABLE_NAME, word)

    def test_name_consumes_alphanumerics(self):
        """Имя продолжается цифрами, но не подчёркиванием."""
        assert kinds("{% item2_x %}") == [
            (T.BEGIN_DIRECTIVE, None),
            (T.VARIABLE_NAME, "item2"),
            (T.OPERATOR, "_"),
            (T.VARIABLE_NAME, "x"),
            (T.END_DIRECTIVE, None),
        ]

    def test_digits_then_letters_split(self):
        assert kinds("{% 12ab %}")[1:3] == [
            (T.NUMBER_LITERAL, 12),
            (T.VARIABLE_NAME, "ab"),
        ]

    def test_unicode_names(self):
        assert kinds("{% имя %}")[1] == (T.VARIABLE_NAME, "имя")

    def test_for_loop_directive(self):
        assert kinds('{% for item in items %}- {{ item }}\n{% endfor %}') == [
            (T.BEGIN_DIRECTIVE, None),
            (T.KEYWORD, Keyword.FOR),
            (T.VARIABLE_NAME, "item"),
            (T.VARIABLE_NAME, "in"),
            (T.VARIABLE_NAME, "items"),
            (T.END_DIRECTIVE, None),
            (T.TEXT_CONTENT, "- "),
            (T.BEGIN_SUBSTITUTION, None),
            (T.VARIABLE_NAME, "item"),
            (T.END_SUBSTITUTION, None),
            (T.TEXT_CONTENT, "\n"),
            (T.BEGIN_DIRECTIVE, None),
            (T.KEYWORD, Keyword.ENDFOR),
            (T.END_DIRECTIVE, None),
        ]

    def test_if_else_chain(self):
        text = '{% if a == "x" then %}A{% elseif b then %}B{% else %}C{% endif %}'
        assert kinds(text) == [
            (T.BEGIN_DIRECTIVE, None),
            (T.KEYWORD, Keyword.IF),
            (T.VARIABLE_NAME, "a"),
            (T.OPERATOR, "="),
            (T.OPERATOR, "="),
            (T.STRING_LITERAL, "x"),
            (T.KEYWORD, Keyword.THEN),
            (T.END_DIRECTIVE, None),
            (T.TEXT_CONTENT, "A"),
            (T.BEGIN_DIRECTIVE, None),
            (T.KEYWORD, Keyword.ELSEIF),
            (T.VARIABLE_NAME, "b"),
            (T.KEYWORD, Keyword.THEN),
            (T.END_DIRECTIVE, None),
            (T.TEXT_CONTENT, "B"),
            (T.BEGIN_DIRECTIVE, None),
            (T.KEYWORD, Keyword.ELSE),
            (T.END_DIRECTIVE, None),
            (T.TEXT_CONTENT, "C"),
            (T.BEGIN_DIRECTIVE, None),
            (T.KEYWORD, Keyword.ENDIF),
            (T.END_DIRECTIVE, None),
        ]


class TestOperators:

    @pytest.mark.parametrize("char", ["+", "-", "(", ")", ".", "[", "]", "|", ",", "!", "<"])
    def test_single_char_operator(self, char):
        assert kinds(f"{{{{ a{char}b }}}}")[1:4] == [
            (T.VARIABLE_NAME, "a"),
            (T.OPERATOR, char),
            (T.VARIABLE_NAME, "b"),
        ]

    def test_multi_char_operator_is_split(self):
        assert kinds("{{ a <= b }}")[2:4] == [(T.OPERATOR, "<"), (T.OPERATOR, "=")]

    def test_reserved_variants_are_never_produced(self):
        """Скобки и точка пока лексируются как операторы."""
        produced = {token.type for token in tokenize_template("{{ a.b[0] }}")}
        assert not produced & {T.DOT, T.LEFT_BRACKET, T.RIGHT_BRACKET, T.BOOLEAN_LITERAL}

    def test_true_false_are_variable_names(self):
        assert kinds("{{ true false }}")[1:3] == [
            (T.VARIABLE_NAME, "true"),
            (T.VARIABLE_NAME, "false"),
        ]


class TestLaziness:
    """Лексер: ленивый итератор без перезапуска."""

    def test_iterator_protocol(self):
        lexer = TemplateLexer("a{{ b }}")
        assert iter(lexer) is lexer
        assert next(lexer).kind == (T.TEXT_CONTENT, "a")
        assert next(lexer).kind == (T.BEGIN_SUBSTITUTION, None)
        assert lexer.state is LexerState.INSIDE_SUBSTITUTION
        assert [t.kind for t in lexer] == [(T.VARIABLE_NAME, "b"), (T.END_SUBSTITUTION, None)]
        with pytest.raises(StopIteration):
            next(lexer)
        assert lexer.next_token() is None

    def test_consumes_source_on_demand(self):
        consumed = []

        def source():
            for char in "ab{{ c }}de":
                consumed.append(char)
                yield char

        lexer = TemplateLexer(source())
        assert consumed == []

        assert lexer.next_token().kind == (T.TEXT_CONTENT, "ab")
        # Одна скобка просмотрена, но не потреблена
        assert "".join(consumed) == "ab{"

        assert lexer.next_token().kind == (T.BEGIN_SUBSTITUTION, None)
        assert "".join(consumed) == "ab{{"

    def test_state_transitions(self):
        lexer = TemplateLexer("{% if %}{{ x }}")
        states = []
        for _ in lexer:
            states.append(lexer.state)
        assert states == [
            LexerState.INSIDE_DIRECTIVE,
            LexerState.INSIDE_DIRECTIVE,
            LexerState.NEUTRAL,
            LexerState.INSIDE_SUBSTITUTION,
            LexerState.INSIDE_SUBSTITUTION,
            LexerState.NEUTRAL,
        ]


class TestPositions:

    def test_token_positions(self):
        tokens = tokenize_template("ab\n{{ foo }}")
        assert [(t.position, t.line, t.column) for t in tokens] == [
            (0, 1, 1),
            (3, 2, 1),
            (6, 2, 4),
            (10, 2, 8),
        ]

    def test_repr(self):
        assert repr(Token(T.KEYWORD, Keyword.IF, 3, 1, 4)) == "Token(KEYWORD, IF, 1:4)"
        assert repr(Token(T.VARIABLE_NAME, "x", 0, 2, 1)) == "Token(VARIABLE_NAME, 'x', 2:1)"
        assert repr(Token(T.END_DIRECTIVE, None, 0, 1, 1)) == "Token(END_DIRECTIVE, 1:1)"


class TestLenientEndOfInput:

    def test_unterminated_region_ends_stream_silently(self):
        config = LexerConfig(strict_eof=False)
        assert kinds("text {{ x", config) == [
            (T.TEXT_CONTENT, "text "),
            (T.BEGIN_SUBSTITUTION, None),
            (T.VARIABLE_NAME, "x"),
        ]

    def test_unterminated_directive_after_whitespace(self):
        config = LexerConfig(strict_eof=False)
        assert kinds("{%   ", config) == [(T.BEGIN_DIRECTIVE, None)]
