"""Kind-dispatched XML text rendering.

The output is rebuilt from the current tree on every call. Attribute values,
element text, comments and instruction bodies are written as they are: no
character is escaped. Consumers that need escaped output must escape the
values before storing them in the tree.

Each renderer returns the pieces of its node's output in order: strings are
emitted as they are and child nodes are expanded in place. ``serialize``
expands them with an explicit stack, so nesting depth is bounded only by
memory.
"""

from typing import TYPE_CHECKING, Callable, Dict, List, Union

from xmlx.tree.node_type import NodeType

if TYPE_CHECKING:
    from xmlx.tree.node import Node, QName

Piece = Union[str, "Node"]


def serialize(node: "Node") -> str:
    """Render a node and its subtree as XML text."""
    parts: List[str] = []
    pending: List[Piece] = [node]

    while pending:
        piece = pending.pop()
        if isinstance(piece, str):
            parts.append(piece)
            continue
        pending.extend(reversed(_RENDERERS[piece.node_type](piece)))

    return "".join(parts)


def qualified_name(name: "QName") -> str:
    """Format a qualified name as ``space:local`` or ``local``."""
    if name.space:
        return f"{name.space}:{name.local}"
    return name.local


def _render_root(node: "Node") -> List[Piece]:
    return list(node.children)


def _render_proc_inst(node: "Node") -> List[Piece]:
    return [f"<?{node.target} {node.value}?>"]


def _render_comment(node: "Node") -> List[Piece]:
    return [f"<!-- {node.value} -->"]


def _render_directive(node: "Node") -> List[Piece]:
    return [f"<!{node.value}!>"]


def _render_element(node: "Node") -> List[Piece]:
    tag = qualified_name(node.name)
    opening: List[str] = ["<", tag]

    for attr in node.attributes:
        opening.append(f' {qualified_name(attr.name)}="{attr.value}"')

    if not node.children and not node.value:
        opening.append(" />")
        return ["".join(opening)]

    opening.append(">")
    pieces: List[Piece] = ["".join(opening)]
    pieces.extend(node.children)
    pieces.append(f"{node.value}</{tag}>")
    return pieces


_RENDERERS: Dict[NodeType, Callable[["Node"], List[Piece]]] = {
    NodeType.ROOT: _render_root,
    NodeType.DIRECTIVE: _render_directive,
    NodeType.PROC_INST: _render_proc_inst,
    NodeType.COMMENT: _render_comment,
    NodeType.ELEMENT: _render_element,
}
