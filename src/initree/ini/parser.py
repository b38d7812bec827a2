# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/10 01:04:45
# @Author : Kariko Lin

"""Builds `IniDocument`s out of reader tokens, and reads/writes files.

Section headers supported:

    ```ini
    [section]
    [child : section]     ; inherit keys `child` does not declare
    [db.replica : primary]  ; nested; the parent is looked up as db.primary
    [db.backup : .section]  ; leading dot: the parent is looked up from root
    ```

Inheritance is applied when the child is complete, that is, at the next
header (or the end of input). Parents must be declared earlier.

Saving is lossy: comments, formatting and inheritance declarations are
gone. Values are escaped (and quoted when they have edge whitespace) so
that `UniversalIniReader` reads them back as they are in memory; `%`
is written as is, so read such a file back with `lookups=False`.
"""

import logging

import chardet
import yaml

from ..abstract import FileHandler
from .consts import INHERIT_SEP, PATH_SEP
from .errors import DuplicateKey, IniError, IniSyntaxError
from .escapes import make_escape_sequences
from .model import IniDocument, IniSection
from .reader import Entry, IniReader, SectionHeader, UniversalIniReader

logger = logging.getLogger(__name__)


def _child(section: IniSection, name: str) -> IniSection:
    if section.has_section(name):
        return section.get_section(name)
    return section.add_section(name)


def _open_section(
    root: IniSection, header: str
) -> tuple[IniSection, IniSection | None]:
    """Returns the section a header names, and the one it inherits from."""
    name, sep, base = header.partition(INHERIT_SEP)
    if sep:
        name, base = name.strip(), base.strip()
        if not base:
            raise IniSyntaxError(f'[{header}] inherits from nothing')

    *nesting_path, leaf = name.split(PATH_SEP)
    nesting = root
    for i in nesting_path:
        nesting = _child(nesting, i)

    parent = None
    if base.startswith(PATH_SEP):
        parent = root.get_section_ex(base[len(PATH_SEP):])
    elif base:
        parent = nesting.get_section_ex(base)
    # every header makes a new leaf, duplicates included.
    return nesting.add_section(leaf), parent


def build(reader: IniReader, ins: IniDocument | None = None) -> IniDocument:
    """Consume `reader` into `ins` (or a new document).

    Every header creates a new section. Only the intermediate parts of a
    dotted name reuse existing sections, so a nested header may land in a
    pre-seeded `ins`.

    Raises:
        DuplicateKey: a key repeats within one section.
        SectionNotFound: an inherited section is not declared (yet).
        IniSyntaxError: and its subclasses, on malformed input.
    """
    if ins is None:
        ins = IniDocument()
    section = ins.root
    pending: IniSection | None = None

    for token in reader:
        try:
            if isinstance(token, SectionHeader):
                if pending is not None:
                    section.inherit(pending)
                    pending = None
                section, pending = _open_section(ins.root, token.name)
                logger.debug('now reading %s', section)
            elif isinstance(token, Entry):
                if token.name in section:
                    raise DuplicateKey(section.path or section.name,
                                       token.name)
                section[token.name] = token.value
            # blanks and comments mean nothing to the tree.
        except IniError as e:
            raise e.locate(reader.source, token.offset)

    if pending is not None:
        section.inherit(pending)
    return ins


def parse_string(
    data: str,
    lookups: bool = True,
    reader: type[IniReader] | None = None,
    ins: IniDocument | None = None
) -> IniDocument:
    """Parse decoded INI text.

    Args:
        lookups: resolve `%path%` references right away. Turn it off if
            you'd like to inject keys first, then call
            `IniDocument.resolve_lookups()` yourself.
        reader: reader class, `UniversalIniReader` by default.
        ins: document to parse into.
    """
    if reader is None:
        reader = UniversalIniReader
    ret = build(reader(data), ins)
    if lookups:
        ret.resolve_lookups()
    return ret


class IniParser(FileHandler[IniDocument]):
    def __init__(
        self, filename: str, encoding: str | None = None, *,
        reader: type[IniReader] = UniversalIniReader,
        lookups: bool = True
    ) -> None:
        super().__init__(filename, encoding)
        self._reader = reader
        self._lookups = lookups

    def readstring(
        self, data: str, ins: IniDocument | None = None
    ) -> IniDocument:
        """读取解码好的字符串。

        如没有特殊需求，直接调用`self.read()`便是。
        """
        return parse_string(data, self._lookups, self._reader, ins)

    @staticmethod
    def _decode_file(filename: str) -> str:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if (codec is None or codec['encoding'] is None
                or codec['confidence'] < 0.8):
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            return raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            return raw.decode('gbk')

    def read(self) -> IniDocument:
        """读取`IniParser`实例指定的文件。"""
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                data = fp.read()
        except UnicodeDecodeError:
            logger.warning('%s is not %s encoded, guessing with chardet.',
                           self._fn, self._codec or 'default')
            data = self._decode_file(self._fn)
        return self.readstring(data)

    @staticmethod
    def _output_key(key: str) -> str:
        # names are never unescaped, only quoting helps.
        if (not key or key != key.strip() or '=' in key
                or key[0] in '[;#'):
            return f'"{key}"'
        return key

    @staticmethod
    def _output_value(value: str) -> str:
        if value != value.strip():
            return f'"{make_escape_sequences(value, True)}"'
        return make_escape_sequences(value)

    @classmethod
    def _output_section(cls, section: IniSection, delimiter: str) -> str:
        ret = [] if section.parent is None else [f'[{section.path}]']
        for k, v in section.items():
            ret.append(
                f'{cls._output_key(k)}{delimiter}{cls._output_value(v)}')
        return '\n'.join(ret)

    @classmethod
    def dumps(
        cls, instance: IniDocument, *,
        delimiter: str = ' = ',
        blank_lines: int = 1
    ) -> str:
        """Root pairs first, then every section depth first,
        headed with its full dotted path."""
        buffers = [cls._output_section(i, delimiter) for i in instance.walk()]
        return ('\n' * (blank_lines + 1)).join(i for i in buffers if i) + '\n'

    def write(
        self, instance: IniDocument, *,
        delimiter: str = ' = ',
        blank_lines: int = 1
    ) -> None:
        """保存到*一个* INI 文件。

        注：此操作*不会*保留注释、继承声明与原有顺序。
        """
        with open(self._fn, 'w', encoding=self._codec) as fp:
            fp.write(self.dumps(
                instance, delimiter=delimiter, blank_lines=blank_lines))

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


class IniYamlParser(FileHandler[IniDocument]):
    """Dumps the whole tree, nested sections included, as YAML:

        ```yaml
        keys: {}
        sections:
        - name: api
          keys:
            endpoint: http://test
          sections: []
        ```
    """

    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        super().__init__(filename, encoding)

    @staticmethod
    def _load_section(section: IniSection, data: dict) -> None:
        for k, v in (data.get('keys') or {}).items():
            # may there be some pure digits considered as int
            section[str(k)] = '' if v is None else str(v)
        for i in data.get('sections') or []:
            IniYamlParser._load_section(
                section.add_section(str(i['name'])), i)

    def read(self) -> IniDocument:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            data = yaml.load(fp, yaml.FullLoader)
        ret = IniDocument()
        if data:
            self._load_section(ret.root, data)
        return ret

    def write(self, instance: IniDocument, indent: int = 2) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.dump(instance.root.to_dict(), fp, allow_unicode=True,
                      sort_keys=False, indent=indent)
