"""xmlx: an in-memory XML node tree.

Build a tree from parser events, look nodes up by qualified name, read
typed scalars from node text and attributes, and render the tree back to
XML text.

Progressive API Disclosure:
- Level 1: parse_string() and the Node query/render methods
- Level 2: Configured parser - XMLXParser with ParserConfig
- Level 3: Structured decoding - Node.unmarshal with a decoder
"""

__version__ = "0.1.0"
__author__ = "xmlx Team"

from .api import XMLXParser, ParseResult, parse_string, unmarshal
from .shared.config import ParserConfig
from .tree import Attr, Node, NodeTreeBuilder, NodeType, QName

__all__ = [
    "__author__",
    "__version__",

    "parse_string",
    "unmarshal",

    "XMLXParser",
    "ParserConfig",

    "Attr",
    "Node",
    "NodeTreeBuilder",
    "NodeType",
    "ParseResult",
    "QName",
]
