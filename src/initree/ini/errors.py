# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/12 21:03:40
# @Author : Kariko Lin

"""Everything here aborts the current parse (or query) right away.
There is no partial result to recover."""


class IniError(Exception):
    """Base of all INI errors.

    Attributes:
        offset: Buffer offset where the problem was found, if known.
        line_number: 1-based line of `offset`, if known.
    """
    offset: int | None
    line_number: int | None

    def __init__(
        self, *args,
        offset: int | None = None,
        line_number: int | None = None
    ) -> None:
        super().__init__(*args)
        self.offset = offset
        self.line_number = line_number

    def locate(self, source: str, offset: int) -> 'IniError':
        """Attach position info, unless some inner frame already did."""
        if self.offset is None:
            self.offset = offset
            self.line_number = source.count('\n', 0, offset) + 1
        return self

    def __str__(self) -> str:
        # not super(): KeyError subclasses would repr() the message.
        msg = Exception.__str__(self)
        if self.line_number is not None:
            msg += f' (line {self.line_number})'
        return msg


class IniSyntaxError(IniError):
    pass


class UnterminatedComment(IniSyntaxError):
    pass


class UnterminatedQuote(IniSyntaxError):
    pass


class UnterminatedSection(IniSyntaxError):
    pass


class InvalidEscapeSequence(IniSyntaxError):
    pass


class DuplicateKey(IniError):
    # a la configparser.DuplicateOptionError
    def __init__(self, section: str, key: str, **kwargs) -> None:
        super().__init__(
            f"Duplicate keys were found while reading section '{section}'; "
            f"key '{key}' already exists", **kwargs)
        self.section = section
        self.key = key


class SectionNotFound(IniError, KeyError):
    def __init__(self, name: str, **kwargs) -> None:
        super().__init__(f"Section '{name}' does not exist", **kwargs)
        self.name = name


class KeyNotFound(IniError, KeyError):
    def __init__(self, name: str, **kwargs) -> None:
        super().__init__(f"Key '{name}' does not exist", **kwargs)
        self.name = name
