# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2023/11/14 20:01:52
# @Author : Chloride

import logging

from .ini import (
    DuplicateKey,
    IniDocument,
    IniError,
    IniParser,
    IniReader,
    IniSection,
    IniSyntaxError,
    IniYamlParser,
    InvalidEscapeSequence,
    KeyNotFound,
    ReaderFlags,
    SectionNotFound,
    StrictIniReader,
    UniversalIniReader,
    UnterminatedComment,
    UnterminatedQuote,
    UnterminatedSection,
    parse_string
)

__all__ = [
    'IniDocument', 'IniSection', 'IniParser', 'IniYamlParser',
    'IniReader', 'StrictIniReader', 'UniversalIniReader', 'ReaderFlags',
    'IniError', 'IniSyntaxError', 'UnterminatedComment', 'UnterminatedQuote',
    'UnterminatedSection', 'InvalidEscapeSequence', 'DuplicateKey',
    'SectionNotFound', 'KeyNotFound',
    'parse_string', 'parse_file'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')


def parse_file(
    filename: str,
    encoding: str | None = None,
    lookups: bool = True,
    reader: type[IniReader] = UniversalIniReader
) -> IniDocument:
    return IniParser(filename, encoding, reader=reader, lookups=lookups).read()
