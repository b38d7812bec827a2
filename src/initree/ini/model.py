# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/10 00:57:10
# @Author : Kariko Lin

"""
Basically INI Structure with nested sections and inheritance support.

`IniDocument` owns every section node in one list (the arena), and what
users get is `IniSection`, a handle of (document, index). Handles stay
valid as long as the document lives, even after the section is removed
(it is just no longer reachable from the root).
"""

import logging
from collections.abc import Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING
from warnings import warn

from .consts import PATH_SEP, ROOT_NAME
from .errors import KeyNotFound, SectionNotFound

if TYPE_CHECKING:
    from .reader import IniReader

logger = logging.getLogger(__name__)

_MISSING: Any = object()


@dataclass
class _SectionNode:
    name: str
    parent: int | None = None
    children: list[int] = field(default_factory=list)
    keys: dict[str, str] = field(default_factory=dict)


class IniSection(MutableMapping[str, str]):
    """INI 小节。

    As a mapping it maintains the section's own key-value pairs
    (inherited ones included, since inheritance is merged on parsing).
    Child sections are reached with `get_section()` and friends.
    """

    def __init__(self, document: 'IniDocument', index: int) -> None:
        self._doc = document
        self._idx = index

    @property
    def _node(self) -> _SectionNode:
        return self._doc._nodes[self._idx]

    def _wrap(self, index: int) -> 'IniSection':
        return IniSection(self._doc, index)

    # ---- mapping protocol over keys ----

    def __getitem__(self, key: str) -> str:
        try:
            return self._node.keys[key]
        except KeyError:
            raise KeyNotFound(key) from None

    def __setitem__(self, key: str, value: str) -> None:
        self._node.keys[key] = value

    def __delitem__(self, key: str) -> None:
        try:
            del self._node.keys[key]
        except KeyError:
            raise KeyNotFound(key) from None

    def __contains__(self, key: object) -> bool:
        return key in self._node.keys

    def __len__(self) -> int:
        return len(self._node.keys)

    def __iter__(self) -> Iterator[str]:
        return iter(self._node.keys)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniSection):
            return NotImplemented
        return self._doc is other._doc and self._idx == other._idx

    def __hash__(self) -> int:
        return hash((id(self._doc), self._idx))

    def __str__(self) -> str:
        return f"[{self.name}]"

    def __repr__(self) -> str:
        return '[%s] { .keys = %d, .sections = %d }' % (
            self.name, len(self._node.keys), len(self._node.children))

    # ---- keys ----

    def has_key(self, name: str) -> bool:
        return name in self._node.keys

    def get_key(self, name: str, default: str = _MISSING) -> str:
        """Get the value of `name`.

        Raises:
            KeyNotFound: no such key and no `default` given.
        """
        if name in self._node.keys:
            return self._node.keys[name]
        if default is _MISSING:
            raise KeyNotFound(name)
        return default

    def set_key(self, name: str, value: str) -> None:
        """Unlike parsing, setting an existing key just overwrites it."""
        self._node.keys[name] = value

    def remove_key(self, name: str) -> None:
        self._node.keys.pop(name, None)

    # ---- tree ----

    @property
    def name(self) -> str:
        return self._node.name

    @property
    def parent(self) -> 'IniSection | None':
        if (i := self._node.parent) is None:
            return None
        return self._wrap(i)

    def has_parent(self) -> bool:
        return self._node.parent is not None

    @property
    def document(self) -> 'IniDocument':
        return self._doc

    @property
    def root(self) -> 'IniSection':
        """Top of the tree this section hangs in. For a removed section
        that is the top of its detached subtree, not the document root."""
        i = self._idx
        while (p := self._doc._nodes[i].parent) is not None:
            i = p
        return self._wrap(i)

    @property
    def path(self) -> str:
        """Dotted path from the root, `""` for the root itself."""
        names: list[str] = []
        node = self._node
        while node.parent is not None:
            names.append(node.name)
            node = self._doc._nodes[node.parent]
        return PATH_SEP.join(reversed(names))

    @property
    def sections(self) -> list['IniSection']:
        return [self._wrap(i) for i in self._node.children]

    def _find_child(self, name: str) -> int | None:
        for i in self._node.children:
            if self._doc._nodes[i].name == name:
                return i
        return None

    def has_section(self, name: str) -> bool:
        return self._find_child(name) is not None

    def get_section(self, name: str) -> 'IniSection':
        """Direct child named `name`. If there are several, the first one.

        Raises:
            SectionNotFound: no such child.
        """
        if (i := self._find_child(name)) is None:
            raise SectionNotFound(name)
        return self._wrap(i)

    def get_section_ex(self, path: str) -> 'IniSection':
        """Descendant by dotted path, e.g. `db.replica`.
        An empty path means this section."""
        ret = self
        if not path:
            return ret
        for i in path.split(PATH_SEP):
            ret = ret.get_section(i)
        return ret

    def add_section(self, name: str) -> 'IniSection':
        """Always appends a new child, even if `name` is taken."""
        nodes = self._doc._nodes
        nodes.append(_SectionNode(name, self._idx))
        self._node.children.append(len(nodes) - 1)
        logger.debug('section [%s] added under [%s]', name, self.name)
        return self._wrap(len(nodes) - 1)

    def remove_section(self, name: str) -> None:
        """Detach every direct child named `name`."""
        nodes = self._doc._nodes
        kept: list[int] = []
        for i in self._node.children:
            if nodes[i].name == name:
                nodes[i].parent = None
            else:
                kept.append(i)
        if len(kept) == len(self._node.children):
            warn(f'{self} has no child section "{name}" to remove.')
        self._node.children = kept

    def set_parent(self, parent: 'IniSection') -> None:
        """Move this section (with its subtree) under `parent`."""
        if parent._doc is not self._doc:
            raise ValueError('Cannot move sections between documents.')
        if self._idx == 0:
            raise ValueError('The document root cannot be moved.')
        i = parent._idx
        while i is not None:
            if i == self._idx:
                raise ValueError(f'Cannot move {self} under {parent}, '
                                 'which is itself or its descendant.')
            i = self._doc._nodes[i].parent

        # a removed (detached) section has no old parent to leave.
        if (old := self._node.parent) is not None:
            self._doc._nodes[old].children.remove(self._idx)
        self._node.parent = parent._idx
        parent._node.children.append(self._idx)

    def inherit(self, other: Mapping[str, str]) -> None:
        """Take keys from `other` which this section lacks.
        Own keys always win."""
        keys = self._node.keys
        for k, v in other.items():
            keys.setdefault(k, v)
        logger.debug('%s inherited from %s', self, other)

    def walk(self) -> Iterator['IniSection']:
        """DFS over this section and all its descendants, in child order."""
        stack = [self._idx]
        while stack:
            i = stack.pop()
            yield self._wrap(i)
            stack.extend(reversed(self._doc._nodes[i].children))

    def resolve_lookups(self) -> None:
        """Replace `%path.to.key%` references, see `lookups.py`."""
        from .lookups import resolve
        resolve(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            'keys': dict(self._node.keys),
            'sections': [
                {'name': i.name, **i.to_dict()} for i in self.sections
            ]
        }


class IniDocument(MutableMapping[str, IniSection]):
    """INI 文件表示。Works as a mapping over top level sections:

        ```ini
        key = val  ; use self.header for pairs above any section.

        [section]
        key233 = val666
        [child : section]  ; inheritance
        [section.nested]   ; nesting, `doc['section'].get_section('nested')`
        ```

    Duplicate section names are permitted, but only the first one is
    reachable by name.
    """

    def __init__(self) -> None:
        self._nodes: list[_SectionNode] = [_SectionNode(ROOT_NAME)]

    @property
    def root(self) -> IniSection:
        return IniSection(self, 0)

    @property
    def header(self) -> IniSection:
        """Pairs which do not belong to any section."""
        return self.root

    def __getitem__(self, key: str) -> IniSection:
        return self.root.get_section(key)

    def __setitem__(
        self,
        key: str,
        value: Mapping[str, str]
    ) -> None:
        root = self.root
        section = (root.get_section(key) if root.has_section(key)
                   else root.add_section(key))
        pairs = dict(value)
        section._node.keys.clear()
        section._node.keys.update(pairs)

    def __delitem__(self, key: str) -> None:
        if not self.root.has_section(key):
            raise SectionNotFound(key)
        self.root.remove_section(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.root.has_section(key)

    def __len__(self) -> int:
        return len(self._nodes[0].children)

    def __iter__(self) -> Iterator[str]:
        return iter([i.name for i in self.root.sections])

    def __repr__(self) -> str:
        return f'<IniDocument sections={list(self)}>'

    def walk(self) -> Iterator[IniSection]:
        return self.root.walk()

    def resolve_lookups(self) -> None:
        self.root.resolve_lookups()

    @classmethod
    def parse_string(
        cls, data: str,
        lookups: bool = True,
        reader: 'type[IniReader] | None' = None
    ) -> 'IniDocument':
        from .parser import parse_string
        return parse_string(data, lookups, reader)
