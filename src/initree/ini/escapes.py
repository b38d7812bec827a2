# -*- encoding: utf-8 -*-
# @File   : escapes.py
# @Time   : 2024/10/12 21:40:02
# @Author : Kariko Lin

from string import hexdigits

from .errors import InvalidEscapeSequence

ESCAPE_SEQUENCES: dict[str, str] = {
    'n': '\n', 'r': '\r', 't': '\t', 'b': '\b',
    '\\': '\\', '#': '#', ';': ';', '=': '=', ':': ':', '"': '"', "'": "'"
}


def parse_escape_sequences(value: str) -> str:
    """Translate backslash escapes in a value.

    `\\xHH` takes exactly two hex digits. Anything not listed in
    `ESCAPE_SEQUENCES` raises `InvalidEscapeSequence`.
    """
    if '\\' not in value:
        return value

    ret: list[str] = []
    i = 0
    while i < len(value):
        c = value[i]
        i += 1
        if c != '\\':
            ret.append(c)
            continue

        if i >= len(value):
            raise InvalidEscapeSequence(
                'Invalid escape sequence (trailing backslash)')
        c = value[i]
        i += 1
        if c in ESCAPE_SEQUENCES:
            ret.append(ESCAPE_SEQUENCES[c])
        elif c == 'x':
            digits = value[i:i + 2]
            if len(digits) < 2 or any(j not in hexdigits for j in digits):
                raise InvalidEscapeSequence(
                    f'Invalid escape sequence (\\x{digits})')
            ret.append(chr(int(digits, 16)))
            i += 2
        else:
            raise InvalidEscapeSequence(f'Invalid escape sequence (\\{c})')
    return ''.join(ret)


_MAKE_ESCAPES: dict[str, str] = {
    '\\': '\\', '\n': 'n', '\r': 'r', '\t': 't', '\b': 'b', '"': '"'
}


def make_escape_sequences(value: str, quoted: bool = False) -> str:
    """Reverse of `parse_escape_sequences()`, for writing values back.

    Inside quotes `"` turns into `\\x22`, since the reader looks for the
    closing quote before translating anything.
    """
    ret: list[str] = []
    for c in value:
        if c == '"' and quoted:
            ret.append('\\x22')
        elif c in _MAKE_ESCAPES:
            ret.append('\\' + _MAKE_ESCAPES[c])
        elif ord(c) < 0x20 or c == '\x7f':
            ret.append(f'\\x{ord(c):02x}')
        else:
            ret.append(c)
    return ''.join(ret)
