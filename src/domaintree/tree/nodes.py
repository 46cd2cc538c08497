"""
Editable domain tree nodes.
"""

from __future__ import annotations

import copy
import itertools
from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Optional, Tuple

from ..domain.tokens import Connective, Domain, Token
from ..fields.definitions import FieldDef
from ..registry.operators import Operator

_node_ids = itertools.count(1)


def next_node_id() -> int:
    return next(_node_ids)


class DomainNode(ABC):
    """
    Capability shared by leaves and branches.

    ``id`` addresses the node during edits and is never reused, clones
    included. ``parent`` is maintained by the owning branch.
    """

    kind: str = ""

    def __init__(self) -> None:
        self.id = next_node_id()
        self.parent: Optional["BranchNode"] = None

    @abstractmethod
    def to_domain(self) -> Domain:
        """Serialize this subtree into prefix-notation tokens."""

    @abstractmethod
    def clone(self) -> "DomainNode":
        """Deep copy carrying fresh ids and no parent."""

    @abstractmethod
    def structure(self) -> Tuple[Any, ...]:
        """Id-free nested tuple used to compare trees structurally."""

    def root(self) -> "DomainNode":
        node: DomainNode = self
        while node.parent is not None:
            node = node.parent
        return node

    def walk(self) -> Iterator["DomainNode"]:
        yield self


class LeafNode(DomainNode):
    kind = "leaf"

    def __init__(self, field: FieldDef, operator: Operator, value: Any) -> None:
        super().__init__()
        self.field = field
        self.operator = operator
        self.value = value

    def __repr__(self) -> str:
        return f"<LeafNode {self.id} {self.field.name!r} {self.operator.key!r} {self.value!r}>"

    def to_domain(self) -> Domain:
        return Domain((self.operator.to_condition(self.field.name, self.value),))

    def clone(self) -> "LeafNode":
        return LeafNode(self.field, self.operator, copy.deepcopy(self.value))

    def structure(self) -> Tuple[Any, ...]:
        value = tuple(self.value) if isinstance(self.value, list) else self.value
        return ("leaf", self.field.name, self.operator.key, value)


class BranchNode(DomainNode):
    kind = "branch"

    def __init__(self, operator: Connective | str, children: Optional[List[DomainNode]] = None) -> None:
        super().__init__()
        self.operator = Connective(operator)
        self.children: List[DomainNode] = []
        for child in children or []:
            self.add(child)

    def __repr__(self) -> str:
        return f"<BranchNode {self.id} {self.operator.value} children={len(self.children)}>"

    # Traversal ------------------------------------------------------------
    def walk(self) -> Iterator[DomainNode]:
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, node_id: int) -> Optional[DomainNode]:
        for node in self.walk():
            if node.id == node_id:
                return node
        return None

    def index_of(self, node_id: int) -> Optional[int]:
        for index, child in enumerate(self.children):
            if child.id == node_id:
                return index
        return None

    # Mutation -------------------------------------------------------------
    def add(self, node: DomainNode) -> None:
        if self.operator is Connective.NOT and self.children:
            self._negated_group().add(node)
            return
        node.parent = self
        self.children.append(node)

    def insert_after(self, sibling_id: int, node: DomainNode) -> None:
        index = self.index_of(sibling_id)
        if index is None:
            return
        if self.operator is Connective.NOT:
            group = self._negated_group()
            if group.index_of(sibling_id) is None:
                group.add(node)
            else:
                group.insert_after(sibling_id, node)
            return
        node.parent = self
        self.children.insert(index + 1, node)

    def _negated_group(self) -> "BranchNode":
        """
        Return the AND branch holding the operands of this negation.

        A negation keeps exactly one child, so a lone operand is first wrapped
        in a new AND branch.
        """
        child = self.children[0]
        if isinstance(child, BranchNode) and child.operator is Connective.AND:
            return child
        group = BranchNode(Connective.AND, [child])
        group.parent = self
        self.children[0] = group
        return group

    def delete(self, node_id: int) -> None:
        """
        Remove the direct child ``node_id``.

        A non-root branch left empty is removed from its parent; a non-root
        AND/OR branch left with a single child is replaced by that child. The
        root is never removed, but a root left holding a single AND/OR branch
        takes over that branch's operator and children.
        """
        index = self.index_of(node_id)
        if index is None:
            return
        removed = self.children.pop(index)
        removed.parent = None
        parent = self.parent
        if parent is None:
            self._lift_single_branch()
            return
        if not self.children:
            parent.delete(self.id)
        elif len(self.children) == 1 and self.operator is not Connective.NOT:
            parent.replace(self.id, self.children[0])

    def _lift_single_branch(self) -> None:
        if len(self.children) != 1 or self.operator is Connective.NOT:
            return
        child = self.children[0]
        if not isinstance(child, BranchNode) or child.operator is Connective.NOT:
            return
        self.operator = child.operator
        self.children = []
        for grandchild in child.children:
            grandchild.parent = self
            self.children.append(grandchild)
        child.children = []
        child.parent = None

    def replace(self, node_id: int, node: DomainNode) -> None:
        """
        Put ``node`` in place of the direct child ``node_id``.

        A branch sharing this branch's AND/OR operator is merged in.
        """
        index = self.index_of(node_id)
        if index is None:
            return
        self.children[index].parent = None
        if (
            isinstance(node, BranchNode)
            and node.operator is self.operator
            and self.operator is not Connective.NOT
        ):
            merged = list(node.children)
            node.children = []
        else:
            merged = [node]
        for child in merged:
            child.parent = self
        self.children[index : index + 1] = merged

    # Serialization --------------------------------------------------------
    def to_domain(self) -> Domain:
        parts = [child.to_domain() for child in self.children]
        parts = [part for part in parts if not part.is_empty()]
        if not parts:
            return Domain()
        if self.operator is Connective.NOT:
            tokens: List[Token] = [Connective.NOT]
            for part in parts:
                tokens.extend(part.tokens)
            return Domain(tuple(tokens))
        tokens = []
        for part in parts[:-1]:
            tokens.append(self.operator)
            tokens.extend(part.tokens)
        tokens.extend(parts[-1].tokens)
        return Domain(tuple(tokens))

    def clone(self) -> "BranchNode":
        return BranchNode(self.operator, [child.clone() for child in self.children])

    def structure(self) -> Tuple[Any, ...]:
        return ("branch", self.operator.value, tuple(child.structure() for child in self.children))
