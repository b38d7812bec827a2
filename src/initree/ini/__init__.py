# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/10 01:16:53
# @Author : Kariko Lin

from .consts import (
    STRICT_FORMAT,
    UNIVERSAL_FORMAT,
    BlockDef,
    FormatDescriptor,
    ReaderFlags
)
from .errors import (
    DuplicateKey,
    IniError,
    IniSyntaxError,
    InvalidEscapeSequence,
    KeyNotFound,
    SectionNotFound,
    UnterminatedComment,
    UnterminatedQuote,
    UnterminatedSection
)
from .escapes import make_escape_sequences, parse_escape_sequences
from .model import IniDocument, IniSection
from .parser import IniParser, IniYamlParser, build, parse_string
from .reader import (
    Blank,
    Comment,
    Entry,
    IniReader,
    SectionHeader,
    StrictIniReader,
    Token,
    UniversalIniReader
)
