"""Node tree for the xmlx library.

Key Components:
    Node: Tree node of one of five kinds with attributes, children and a
        weak parent link
    QName / Attr: Qualified names and attributes
    NodeTreeBuilder: Parser target that builds node trees from parser events
    serialize: Kind-dispatched XML text rendering
"""

from .builder import NodeTreeBuilder
from .node import Attr, Decoder, Node, QName, new_node
from .node_type import NodeType
from .search import WILDCARD, select_node, select_nodes
from .serializer import serialize

__all__ = [
    "Attr",
    "Decoder",
    "Node",
    "NodeTreeBuilder",
    "NodeType",
    "QName",
    "WILDCARD",
    "new_node",
    "select_node",
    "select_nodes",
    "serialize",
]
