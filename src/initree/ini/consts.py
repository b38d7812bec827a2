# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/10 01:15:56
# @Author : Kariko Lin

from dataclasses import dataclass, field
from enum import IntFlag


@dataclass(frozen=True)
class BlockDef:
    """A comment or quote style, matched by literal prefix.

    A single line block should use the line terminator as `closing`
    and leave `multiline` off.
    """
    opening: str
    closing: str
    multiline: bool = False

    def __post_init__(self) -> None:
        if not self.opening or not self.closing:
            raise ValueError('BlockDef delimiters must not be empty.')


@dataclass(frozen=True)
class FormatDescriptor:
    # order matters: the first matching opening wins,
    # so `"""` has to be listed before `"`.
    comments: tuple[BlockDef, ...] = field(default_factory=tuple)
    quotes: tuple[BlockDef, ...] = field(default_factory=tuple)


class ReaderFlags(IntFlag):
    NONE = 0
    PROCESS_ESCAPES = 1 << 0
    TRIM_SECTIONS = 1 << 4
    TRIM_KEYS = 1 << 5
    TRIM_VALUES = 1 << 6
    TRIM_ALL = TRIM_SECTIONS | TRIM_KEYS | TRIM_VALUES


STRICT_FORMAT = FormatDescriptor(
    comments=(BlockDef(';', '\n'),),
    quotes=(BlockDef('"', '"'),)
)

UNIVERSAL_FORMAT = FormatDescriptor(
    comments=(BlockDef(';', '\n'), BlockDef('#', '\n')),
    quotes=(BlockDef('"""', '"""', True), BlockDef('"', '"'))
)

ROOT_NAME = 'root'

ASSIGN = '='
INHERIT_SEP = ':'
PATH_SEP = '.'
LOOKUP_MARK = '%'
