"""Tree construction from parser events.

``NodeTreeBuilder`` implements the parser target interface understood by
both ``xml.etree.ElementTree.XMLParser`` and ``lxml.etree.XMLParser``. The
parser does all tokenizing; the builder only turns its callbacks into nodes
and attaches them with ``Node.add_child``.
"""

from typing import Any, Dict, List, Optional

from xmlx.shared import TreeConfig, get_logger
from xmlx.tree.node import Attr, Node, QName
from xmlx.tree.node_type import NodeType


def split_clark_name(tag: str) -> QName:
    """Split a ``{uri}local`` name as reported by ElementTree and lxml."""
    if tag.startswith("{"):
        space, _, local = tag[1:].partition("}")
        return QName(space, local)
    return QName("", tag)


class NodeTreeBuilder:
    """Parser target that builds a ``Node`` tree under a ROOT node.

    Examples:
        >>> import xml.etree.ElementTree as ET
        >>> builder = NodeTreeBuilder()
        >>> parser = ET.XMLParser(target=builder)
        >>> parser.feed('<item id="7">hi</item>')
        >>> str(parser.close())
        '<item id="7">hi</item>'
    """

    def __init__(
        self,
        config: Optional[TreeConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or TreeConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "tree_builder")
        self.reset()

    def reset(self) -> None:
        """Discard any partial tree and start a new document."""
        self.root = Node(NodeType.ROOT)
        self._stack: List[Node] = [self.root]
        self._text: List[List[str]] = [[]]
        self.nodes_created = 0

    @property
    def current(self) -> Node:
        """Innermost open node; the ROOT node when no element is open."""
        return self._stack[-1]

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._stack) - 1

    def _attach(self, node: Node) -> Node:
        self.current.add_child(node)
        self.nodes_created += 1
        return node

    def start(
        self,
        tag: str,
        attrib: Dict[str, str],
        nsmap: Optional[Dict[Optional[str], str]] = None
    ) -> Node:
        """Open an element."""
        node = Node(NodeType.ELEMENT, name=split_clark_name(tag))
        node.attributes.extend(
            Attr(split_clark_name(key), value) for key, value in attrib.items()
        )
        self._attach(node)
        self._stack.append(node)
        self._text.append([])
        return node

    def end(self, tag: str) -> Node:
        """Close the innermost element and assign its collected text."""
        if self.depth == 0:
            raise ValueError(f"End tag </{tag}> without an open element")

        node = self._stack.pop()
        text = "".join(self._text.pop())
        if self.config.trim_text:
            text = text.strip()
        node.value = text
        return node

    def data(self, text: str) -> None:
        """Collect character data for the innermost element."""
        # Outside the document element only whitespace can occur.
        if self.depth == 0:
            return
        self._text[-1].append(text)

    def comment(self, text: str) -> Optional[Node]:
        if not self.config.keep_comments:
            return None
        value = text.strip() if self.config.trim_text else text
        return self._attach(Node(NodeType.COMMENT, value=value))

    def pi(self, target: str, data: Optional[str] = None) -> Optional[Node]:
        if not self.config.keep_processing_instructions:
            return None
        return self._attach(
            Node(NodeType.PROC_INST, target=target, value=data or "")
        )

    def doctype(
        self,
        name: Optional[str],
        pubid: Optional[str],
        system: Optional[str]
    ) -> Optional[Node]:
        """Record the document type declaration as a DIRECTIVE node."""
        if not self.config.keep_directives:
            return None
        return self._attach(
            Node(NodeType.DIRECTIVE, value=format_doctype(name, pubid, system))
        )

    def close(self) -> Node:
        """Finish the document and return the ROOT node."""
        if self.depth:
            self.logger.warning(
                "Document closed with unterminated elements",
                extra={"open_elements": self.depth},
            )
        self.logger.debug(
            "Tree built",
            extra={
                "nodes_created": self.nodes_created,
                "top_level_nodes": len(self.root.children),
            },
        )
        return self.root

    @property
    def statistics(self) -> Dict[str, Any]:
        return {
            "nodes_created": self.nodes_created,
            "open_elements": self.depth,
        }


def format_doctype(
    name: Optional[str],
    pubid: Optional[str],
    system: Optional[str]
) -> str:
    """Format doctype parts as directive text, e.g. ``DOCTYPE html``."""
    parts: List[str] = ["DOCTYPE"]
    if name:
        parts.append(name)
    if pubid:
        parts.append(f'PUBLIC "{pubid}"')
        if system:
            parts.append(f'"{system}"')
    elif system:
        parts.append(f'SYSTEM "{system}"')
    return " ".join(parts)
