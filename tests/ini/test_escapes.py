import pytest

from initree.ini import (
    InvalidEscapeSequence,
    make_escape_sequences,
    parse_escape_sequences
)


def test_escapes_plain_text():
    assert parse_escape_sequences("abc wef ' n r ;a") == "abc wef ' n r ;a"


def test_escapes_backslashes():
    assert parse_escape_sequences(r'\\n \\\\\\\\\\r') == r'\n \\\\\r'


def test_escapes_control_chars():
    assert parse_escape_sequences('hello\\nworld') == 'hello\nworld'
    assert parse_escape_sequences('a\\tb\\bc') == 'a\tb\bc'
    assert parse_escape_sequences('multi\\r\\nline \\#notacomment') == \
        'multi\r\nline #notacomment'


def test_escapes_syntax_chars():
    assert parse_escape_sequences(r'\;\=\:\"' + "\\'") == ';=:"\''


def test_escapes_hex():
    assert parse_escape_sequences('welp \\x5A\\x41\\x7a') == 'welp ZAz'


@pytest.mark.parametrize('value', [
    'bad \\q', 'short \\x4', 'nothex \\xZZ', 'half \\x4G', 'trailing \\'
])
def test_escapes_invalid(value):
    with pytest.raises(InvalidEscapeSequence):
        parse_escape_sequences(value)


def test_escapes_make():
    assert make_escape_sequences('plain ; text = 1') == 'plain ; text = 1'
    assert make_escape_sequences('C:\\dir\n\t"x"') == r'C:\\dir\n\t\"x\"'
    assert make_escape_sequences('bell\x07 del\x7f') == r'bell\x07 del\x7f'


def test_escapes_make_quoted():
    # the reader would take a bare `"` as the closing quote.
    assert make_escape_sequences(' "a" \\ ', True) == r' \x22a\x22 \\ '


@pytest.mark.parametrize('value', ['C:\\dir\\', '  x  ', 'a\r\nb "c"'])
def test_escapes_make_then_parse(value):
    assert parse_escape_sequences(make_escape_sequences(value)) == value
    assert parse_escape_sequences(make_escape_sequences(value, True)) == value
