# -*- encoding: utf-8 -*-
# @File   : reader.py
# @Time   : 2024/10/12 22:15:31
# @Author : Kariko Lin

"""Low level INI tokenizer.

`IniReader` only splits the source into tokens; building a section tree
out of them is `parser.build()`'s job. Unless you need a custom format,
use one of the presets:

    - `StrictIniReader`: `;` comments, `"` quotes, only keys trimmed,
    no escape sequences.
    - `UniversalIniReader`: also `#` comments and `\"\"\"` multiline
    quotes, everything trimmed, escape sequences translated.

A reader is single use. Iterate it once:

    ```python
    for token in UniversalIniReader('key = value\\n'):
        print(token)
    ```
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from .consts import (
    ASSIGN,
    STRICT_FORMAT,
    UNIVERSAL_FORMAT,
    BlockDef,
    FormatDescriptor,
    ReaderFlags
)
from .errors import (
    IniError,
    IniSyntaxError,
    UnterminatedComment,
    UnterminatedQuote,
    UnterminatedSection
)
from .escapes import parse_escape_sequences


@dataclass
class Blank:
    offset: int = field(default=0, compare=False)


@dataclass
class SectionHeader:
    """Raw `[...]` content, inheritance part included."""
    name: str
    offset: int = field(default=0, compare=False)


@dataclass
class Entry:
    name: str
    value: str = ''
    # for `key = value` it tells if the VALUE was quoted,
    # for a bare `key` if the name was.
    quoted: bool = False
    name_quoted: bool = False
    offset: int = field(default=0, compare=False)


@dataclass
class Comment:
    text: str
    offset: int = field(default=0, compare=False)


Token = Blank | SectionHeader | Entry | Comment


class IniReader:
    FORMAT: FormatDescriptor = STRICT_FORMAT
    FLAGS: ReaderFlags = ReaderFlags.NONE

    def __init__(
        self, source: str,
        fmt: FormatDescriptor | None = None,
        flags: ReaderFlags | None = None
    ) -> None:
        if not source.endswith('\n'):
            source += '\n'
        self.source = source
        self.offset = 0
        self.format = self.FORMAT if fmt is None else fmt
        self.flags = self.FLAGS if flags is None else ReaderFlags(flags)

    def __iter__(self) -> Iterator[Token]:
        while True:
            self._skip_whitespaces()
            if self.exhausted:
                return
            start = self.offset
            try:
                token = self._read_token()
            except IniError as e:
                raise e.locate(self.source, start)
            token.offset = start
            yield token

    @property
    def exhausted(self) -> bool:
        return self.offset >= len(self.source)

    def _read_token(self) -> Token:
        if (block := self._find_block(self.format.comments)) is not None:
            return self._read_comment(block)
        if self.source[self.offset] == '[':
            return self._read_section()
        return self._read_entry()

    def _is_escaped(self, pos: int) -> bool:
        cnt = 0
        while pos - cnt > 0 and self.source[pos - cnt - 1] == '\\':
            cnt += 1
        return cnt % 2 == 1

    def _find_block(self, blocks: Sequence[BlockDef]) -> BlockDef | None:
        if self._is_escaped(self.offset):
            return None
        for i in blocks:
            if self.source.startswith(i.opening, self.offset):
                return i
        return None

    def _line_end(self) -> int:
        ret = self.source.find('\n', self.offset)
        return len(self.source) if ret == -1 else ret

    def _read_comment(self, block: BlockDef) -> Comment:
        start = self.offset + len(block.opening)
        end = self.source.find(block.closing, start)
        if end == -1:
            raise UnterminatedComment('Comment not closed')
        text = self.source[start:end]
        if not block.multiline and '\n' in text:
            raise UnterminatedComment('Comment not closed (multiline)')
        self.offset = end + len(block.closing)
        return Comment(text)

    def _read_section(self) -> SectionHeader:
        end = self.source.find(']', self.offset, self._line_end())
        if end == -1:
            raise UnterminatedSection('Section not closed')
        name = self.source[self.offset + 1:end]
        if self.flags & ReaderFlags.TRIM_SECTIONS:
            name = name.strip()
        self.offset = end + 1
        return SectionHeader(name)

    def _read_entry(self) -> Entry:
        name, name_quoted = self._read_key()
        if self.source[self.offset:self.offset + 1] != ASSIGN:
            return Entry(name, '', name_quoted, name_quoted)
        self.offset += 1
        value, quoted = self._read_value()
        return Entry(name, value, quoted, name_quoted)

    def _read_key(self) -> tuple[str, bool]:
        if (name := self._try_read_quote()) is not None:
            self._skip_spaces()
            return name, True

        line_end = self._line_end()
        end = self.source.find(ASSIGN, self.offset, line_end)
        if end == -1:
            end = line_end
        name = self.source[self.offset:end].rstrip()
        self.offset = end
        if self.flags & ReaderFlags.TRIM_KEYS:
            name = name.lstrip()
        if not name:
            raise IniSyntaxError('Entry without a key name')
        return name, False

    def _read_value(self) -> tuple[str, bool]:
        self._skip_spaces()
        before = self.offset

        value = self._try_read_quote(spanning_ok=True)
        quoted = value is not None
        # `"a" b` is no quoted value, read the whole line raw instead.
        if quoted and self.source[self.offset:self._line_end()].strip():
            self.offset = before
            quoted = False

        if not quoted:
            value = self._read_raw_value()
            if self.flags & ReaderFlags.TRIM_VALUES:
                value = value.strip()

        if self.flags & ReaderFlags.PROCESS_ESCAPES:
            value = parse_escape_sequences(value)
        return value, quoted

    def _read_raw_value(self) -> str:
        escaped = False
        pos = self.offset
        while pos < len(self.source):
            c = self.source[pos]
            if c == '\\':
                escaped = not escaped
            elif c == '\r' and escaped:
                pass
            elif c == '\n' and not escaped:
                break
            else:
                escaped = False
            pos += 1

        raw = self.source[self.offset:pos].split('\n')
        self.offset = pos
        # backslash-newline joins lines, eating the whitespace around.
        lines = [i.rstrip() for i in raw]
        for i in range(len(lines) - 1):
            lines[i] = lines[i][:-1]
        return ''.join(i.lstrip() for i in lines)

    def _try_read_quote(self, spanning_ok: bool = False) -> str | None:
        """Read a quoted string at the cursor, if any.

        With `spanning_ok`, a single line quote crossing a line end
        is not an error: nothing is consumed and `None` is returned.
        """
        if (block := self._find_block(self.format.quotes)) is None:
            return None

        start = self.offset + len(block.opening)
        end = self.source.find(block.closing, start)
        if end == -1:
            raise UnterminatedQuote('Unterminated string literal')
        ret = self.source[start:end]
        if not block.multiline and '\n' in ret:
            if spanning_ok:
                return None
            raise UnterminatedQuote(
                'Unterminated string literal which spans multiple lines '
                '(invalid quotes used?)')
        self.offset = end + len(block.closing)
        return ret

    def _skip_whitespaces(self) -> None:
        while not self.exhausted and self.source[self.offset].isspace():
            self.offset += 1

    def _skip_spaces(self) -> None:
        # never crosses the line end.
        while not self.exhausted and self.source[self.offset] in ' \t':
            self.offset += 1


class StrictIniReader(IniReader):
    FORMAT = STRICT_FORMAT
    FLAGS = ReaderFlags.TRIM_KEYS


class UniversalIniReader(IniReader):
    FORMAT = UNIVERSAL_FORMAT
    FLAGS = ReaderFlags.TRIM_ALL | ReaderFlags.PROCESS_ESCAPES
