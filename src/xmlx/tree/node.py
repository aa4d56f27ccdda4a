"""Node tree data model for the xmlx library.

A document is a tree of ``Node`` objects. Every node has a fixed kind
(``NodeType``), owns its attribute and child lists, and keeps a weak
back-reference to its parent. External parsers build trees through node
construction plus ``add_child``; applications query them through qualified
name search and the typed accessors and render them with ``to_string``.
"""

import weakref
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, TypeVar

from xmlx.tree import scalars, search
from xmlx.tree.node_type import NodeType
from xmlx.tree.serializer import serialize

T = TypeVar("T")

# Given serialized XML text and a target object, populate the target or raise.
Decoder = Callable[[str, Any], Any]


@dataclass(frozen=True)
class QName:
    """Namespace and local name pair. An empty space means no namespace."""

    space: str = ""
    local: str = ""


@dataclass
class Attr:
    """Attribute owned by a single node."""

    name: QName
    value: str = ""


@dataclass(eq=False)
class Node:
    """Single node of the document tree.

    Nodes compare by identity. The parent link is a weak reference: it never
    keeps the parent alive and is maintained only by ``add_child`` and
    ``remove_child``.
    """

    node_type: NodeType
    name: QName = field(default_factory=QName)
    value: str = ""
    target: str = ""  # processing instruction name
    attributes: List[Attr] = field(default_factory=list, repr=False)
    children: List["Node"] = field(default_factory=list, repr=False)
    _parent: Optional["weakref.ReferenceType[Node]"] = field(
        default=None, init=False, repr=False
    )

    @classmethod
    def element(cls, local: str, space: str = "", value: str = "") -> "Node":
        """Create an element node."""
        return cls(NodeType.ELEMENT, name=QName(space, local), value=value)

    @property
    def parent(self) -> Optional["Node"]:
        """The node this one is attached to, if it is still alive."""
        if self._parent is None:
            return None
        return self._parent()

    # Tree mutation

    def add_child(self, child: "Node") -> None:
        """Append a child, detaching it from its current parent first."""
        current = child.parent
        if current is not None:
            current.remove_child(child)
        child._parent = weakref.ref(self)
        self.children.append(child)

    def remove_child(self, child: "Node") -> None:
        """Detach a child. Does nothing when ``child`` is not a child of this node."""
        for index, candidate in enumerate(self.children):
            if candidate is child:
                del self.children[index]
                child._parent = None
                return

    # Search

    def select_node(self, space: str, local: str) -> Optional["Node"]:
        """Find the first node named ``space``/``local`` in this subtree.

        ``space`` may be ``*`` to match any namespace. The search is
        depth-first pre-order and starts with this node; it does not descend
        into a node once that node matches.
        """
        return search.select_node(self, space, local)

    def select_nodes(self, space: str, local: str) -> List["Node"]:
        """Find all nodes named ``space``/``local`` in this subtree.

        Same matching and shadowing rules as ``select_node``.
        """
        return search.select_nodes(self, space, local)

    # Typed node value accessors

    def _node_value(self, space: str, local: str) -> str:
        node = search.select_node(self, space, local)
        if node is None:
            return ""
        return node.value

    def get_string(self, space: str, local: str) -> str:
        """Value text of the first matching node, or ``""``."""
        return self._node_value(space, local)

    def get_int(self, space: str, local: str) -> int:
        """Value of the first matching node as a signed integer, or 0."""
        return _parse_or(scalars.parse_int, self._node_value(space, local), 0)

    def get_int64(self, space: str, local: str) -> int:
        """Value of the first matching node as a signed 64-bit integer, or 0."""
        return _parse_or(scalars.parse_int, self._node_value(space, local), 0)

    def get_uint(self, space: str, local: str) -> int:
        """Value of the first matching node as an unsigned integer, or 0."""
        return _parse_or(scalars.parse_uint, self._node_value(space, local), 0)

    def get_uint64(self, space: str, local: str) -> int:
        """Value of the first matching node as an unsigned 64-bit integer, or 0."""
        return _parse_or(scalars.parse_uint, self._node_value(space, local), 0)

    def get_float32(self, space: str, local: str) -> float:
        """Value of the first matching node at single precision, or 0.0."""
        return _parse_or(scalars.parse_float32, self._node_value(space, local), 0.0)

    def get_float64(self, space: str, local: str) -> float:
        """Value of the first matching node as a float, or 0.0."""
        return _parse_or(scalars.parse_float64, self._node_value(space, local), 0.0)

    def get_bool(self, space: str, local: str) -> bool:
        """Value of the first matching node as a bool, or False."""
        return _parse_or(scalars.parse_bool, self._node_value(space, local), False)

    # Attribute accessors; these only look at this node's own attributes

    def _find_attribute(self, space: str, local: str) -> Optional[Attr]:
        for attr in self.attributes:
            if search.name_matches(attr.name, space, local):
                return attr
        return None

    def has_attribute(self, space: str, local: str) -> bool:
        """Check whether this node carries the named attribute."""
        return self._find_attribute(space, local) is not None

    def get_attribute(self, space: str, local: str) -> str:
        """Value of the first matching attribute, or ``""``."""
        attr = self._find_attribute(space, local)
        if attr is None:
            return ""
        return attr.value

    def get_attribute_int(self, space: str, local: str) -> int:
        """Value of the matching attribute as a signed integer, or 0."""
        return _parse_or(scalars.parse_int, self.get_attribute(space, local), 0)

    def get_attribute_int64(self, space: str, local: str) -> int:
        """Value of the matching attribute as a signed 64-bit integer, or 0."""
        return _parse_or(scalars.parse_int, self.get_attribute(space, local), 0)

    def get_attribute_uint(self, space: str, local: str) -> int:
        """Value of the matching attribute as an unsigned integer, or 0."""
        return _parse_or(scalars.parse_uint, self.get_attribute(space, local), 0)

    def get_attribute_uint64(self, space: str, local: str) -> int:
        """Value of the matching attribute as an unsigned 64-bit integer, or 0."""
        return _parse_or(scalars.parse_uint, self.get_attribute(space, local), 0)

    def get_attribute_float32(self, space: str, local: str) -> float:
        """Value of the matching attribute at single precision, or 0.0."""
        return _parse_or(scalars.parse_float32, self.get_attribute(space, local), 0.0)

    def get_attribute_float64(self, space: str, local: str) -> float:
        """Value of the matching attribute as a float, or 0.0."""
        return _parse_or(scalars.parse_float64, self.get_attribute(space, local), 0.0)

    def get_attribute_bool(self, space: str, local: str) -> bool:
        """Value of the matching attribute as a bool, or False."""
        return _parse_or(scalars.parse_bool, self.get_attribute(space, local), False)

    # Rendering

    def to_string(self) -> str:
        """Render this subtree as XML text. Values are not escaped."""
        return serialize(self)

    def to_bytes(self, encoding: str = "utf-8") -> bytes:
        """Render this subtree as encoded XML text."""
        return serialize(self).encode(encoding)

    def __str__(self) -> str:
        return serialize(self)

    def unmarshal(self, target: Any, decoder: Decoder) -> Any:
        """Render this subtree and hand the text and ``target`` to ``decoder``.

        Whatever the decoder returns is returned; whatever it raises
        propagates unchanged.
        """
        return decoder(serialize(self), target)


def new_node(node_type: NodeType) -> Node:
    """Create an empty node of the given kind."""
    return Node(node_type)


def _parse_or(parser: Callable[[str], Optional[T]], text: str, zero: T) -> T:
    if not text:
        return zero
    value = parser(text)
    if value is None:
        return zero
    return value
