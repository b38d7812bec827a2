# -*- encoding: utf-8 -*-
# @File   : lookups.py
# @Time   : 2024/10/13 15:27:09
# @Author : Kariko Lin

"""Variable lookups, like:

    ```ini
    [api]
    endpoint = http://test
    users = %endpoint%/users      ; relative to [api]
    tokens = %.auth.url%/tokens   ; leading dot: relative to the root
    ```

This runs ONCE over the tree, after parsing (and inheritance) is done.
Substituted text is never expanded again, so resolving a tree twice may
misread a value which happens to contain `%` after the first pass.
"""

import logging
from typing import TYPE_CHECKING
from warnings import warn

from .consts import LOOKUP_MARK, PATH_SEP

if TYPE_CHECKING:
    from .model import IniSection

logger = logging.getLogger(__name__)


def lookup(scope: 'IniSection', path: str) -> str:
    """Get the value at dotted `path`, seen from `scope`.

    Raises:
        SectionNotFound, KeyNotFound: `path` does not resolve.
    """
    if path.startswith(PATH_SEP):
        # the document root, even for sections detached from it.
        scope = scope.document.root
        path = path[len(PATH_SEP):]
    *sections, key = path.split(PATH_SEP)
    return scope.get_section_ex(PATH_SEP.join(sections)).get_key(key)


def substitute(scope: 'IniSection', value: str) -> str:
    if LOOKUP_MARK not in value:
        return value

    ret: list[str] = []
    ref: list[str] | None = None
    for c in value:
        if c != LOOKUP_MARK:
            (ret if ref is None else ref).append(c)
        elif ref is None:
            ref = []
        else:
            path = ''.join(ref)
            ret.append(lookup(scope, path))
            logger.debug('%s: %%%s%% substituted', scope, path)
            ref = None

    if ref is not None:
        warn(f'{scope}: unterminated lookup in "{value}", kept as is.')
        ret.append(LOOKUP_MARK)
        ret.extend(ref)
    return ''.join(ret)


def resolve(section: 'IniSection') -> None:
    """Rewrite values of `section` in place, then those of its children,
    each child being the scope of its own lookups."""
    for k in list(section):
        section[k] = substitute(section, section[k])
    for i in section.sections:
        resolve(i)
