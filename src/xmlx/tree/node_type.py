"""Node kinds of the xmlx tree."""

from enum import Enum


class NodeType(Enum):
    """The closed set of node kinds."""

    ROOT = 0        # Document container, renders only its children
    DIRECTIVE = 1
    PROC_INST = 2
    COMMENT = 3
    ELEMENT = 4
