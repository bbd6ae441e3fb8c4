"""Parse-tree nodes: construction, desugaring of ``if not`` and copying."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional

from .utils import RcError


class NodeType(enum.Enum):
    """Kinds of parse-tree node."""

    ANDALSO = enum.auto()
    ARGS = enum.auto()
    ASSIGN = enum.auto()
    BACKQ = enum.auto()
    BANG = enum.auto()
    BODY = enum.auto()
    BRACE = enum.auto()
    CASE = enum.auto()
    CBODY = enum.auto()
    CONCAT = enum.auto()
    COUNT = enum.auto()
    DUP = enum.auto()
    ELSE = enum.auto()
    EPILOG = enum.auto()
    FLAT = enum.auto()
    FORIN = enum.auto()
    IF = enum.auto()
    IFNOT = enum.auto()
    LAPPEND = enum.auto()
    MATCH = enum.auto()
    NEWFN = enum.auto()
    NMPIPE = enum.auto()
    NOWAIT = enum.auto()
    ORELSE = enum.auto()
    PIPE = enum.auto()
    PRE = enum.auto()
    REDIR = enum.auto()
    RMFN = enum.auto()
    SUBSHELL = enum.auto()
    SWITCH = enum.auto()
    VAR = enum.auto()
    VARSUB = enum.auto()
    WHILE = enum.auto()
    WORD = enum.auto()


# Field layout per kind: i = integer, s = string, m = metacharacter flags, p = child node.
_ONE = {NodeType.BANG, NodeType.NOWAIT, NodeType.COUNT, NodeType.FLAT, NodeType.RMFN,
        NodeType.SUBSHELL, NodeType.VAR, NodeType.CASE, NodeType.IFNOT}
_TWO = {NodeType.ANDALSO, NodeType.ASSIGN, NodeType.BACKQ, NodeType.BODY, NodeType.BRACE,
        NodeType.CONCAT, NodeType.ELSE, NodeType.EPILOG, NodeType.IF, NodeType.NEWFN,
        NodeType.CBODY, NodeType.ORELSE, NodeType.PRE, NodeType.ARGS, NodeType.SWITCH,
        NodeType.MATCH, NodeType.VARSUB, NodeType.WHILE, NodeType.LAPPEND}

_LAYOUT: dict[NodeType, str] = {
    NodeType.DUP: "iii",
    NodeType.WORD: "smi",
    NodeType.FORIN: "ppp",
    NodeType.PIPE: "iipp",
    NodeType.REDIR: "iip",
    NodeType.NMPIPE: "iip",
    **{kind: "p" for kind in _ONE},
    **{kind: "pp" for kind in _TWO},
}


@dataclass
class Node:
    """A parse-tree node: its kind and its fields in layout order."""

    kind: NodeType
    fields: list = field(default_factory=list)


def _kind_of(node: Optional[Node]) -> Optional[NodeType]:
    return node.kind if node is not None else None


def _new_else(yes: Node, no: Node) -> None:
    yes.fields[1] = Node(NodeType.ELSE, [yes.fields[1], no.fields[0]])


def _usable_if(node: Optional[Node]) -> bool:
    return (
        node is not None
        and node.kind is NodeType.IF
        and _kind_of(node.fields[1]) is not NodeType.ELSE
    )


def _desugar_ifnot(n: Node) -> Node:
    """Fold an ``if not`` that follows an ``if`` into an else branch."""
    if n.kind is not NodeType.BODY:
        return n
    first, rest = n.fields
    if _kind_of(rest) is NodeType.IFNOT:
        if not _usable_if(first):
            raise RcError("`if not' must follow `if'")
        _new_else(first, rest)
        n.fields[1] = None
    elif _kind_of(rest) is NodeType.BODY and _kind_of(rest.fields[0]) is NodeType.IFNOT:
        if not _usable_if(first):
            raise RcError("`if not' must follow `if'")
        _new_else(first, rest.fields[0])
        n.fields[1] = rest.fields[1]
    return n


def mk(kind: NodeType, *args: Any) -> Node:
    """Make a node of the given kind from its fields."""
    layout = _LAYOUT.get(kind)
    if layout is None:
        raise ValueError("unexpected node in mk")
    if len(args) != len(layout):
        raise TypeError(f"{kind.name} takes {len(layout)} fields, got {len(args)}")
    return _desugar_ifnot(Node(kind, list(args)))


def treecpy(node: Optional[Node]) -> Optional[Node]:
    """Return a deep copy of a tree."""
    if node is None:
        return None
    if node.kind is NodeType.IFNOT or node.kind not in _LAYOUT:
        raise ValueError("unexpected node in treecpy")
    copied = []
    for code, value in zip(_LAYOUT[node.kind], node.fields):
        if code == "p":
            copied.append(treecpy(value))
        elif code == "m":
            if value is None:
                copied.append(None)
            else:
                meta = value[: len(node.fields[0])]
                copied.append(list(meta) if isinstance(meta, list) else meta)
        else:
            copied.append(value)
    return Node(node.kind, copied)