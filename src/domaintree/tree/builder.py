"""
Build editable trees from parsed domains.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from ..domain.tokens import Condition, Connective, Domain
from ..errors import DomainParseError, UnresolvedFieldError, UnsupportedDomainError
from ..fields.definitions import FieldDef
from ..registry.operators import Operator, ValueMode, resolve_operator
from ..utils.logging import get_logger
from .nodes import BranchNode, DomainNode, LeafNode

logger = get_logger("tree.builder")

FieldDefs = Mapping[Any, Optional[FieldDef]]


class DomainTreeBuilder:
    """
    Turn a :class:`Domain` plus resolved field definitions into a tree.

    The root is always a :class:`BranchNode`. A top-level AND/OR expression
    becomes the root itself; a single leaf or negation is wrapped in an AND
    root. Nested branches sharing their parent's AND/OR operator are merged
    into the parent.
    """

    def build(self, domain: Domain, field_defs: FieldDefs) -> BranchNode:
        if domain.is_empty():
            return BranchNode(Connective.AND)

        # Walk the prefix sequence backwards so each connective finds its
        # operands already built on the stack.
        stack: List[DomainNode] = []
        for token in reversed(domain.tokens):
            if isinstance(token, Connective):
                if len(stack) < token.arity:
                    raise DomainParseError(f"Connective '{token.symbol}' is missing operands")
                operands = [stack.pop() for _ in range(token.arity)]
                stack.append(self._build_branch(token, operands))
            else:
                stack.append(self._build_leaf(token, field_defs))

        if len(stack) != 1:
            raise DomainParseError("Domain does not reduce to a single expression")
        node = stack[0]
        if isinstance(node, BranchNode) and node.operator is not Connective.NOT:
            return node
        return BranchNode(Connective.AND, [node])

    def _build_branch(self, operator: Connective, operands: List[DomainNode]) -> BranchNode:
        branch = BranchNode(operator)
        for operand in operands:
            if (
                operator is not Connective.NOT
                and isinstance(operand, BranchNode)
                and operand.operator is operator
            ):
                for child in list(operand.children):
                    branch.add(child)
            else:
                branch.add(operand)
        return branch

    def _build_leaf(self, condition: Condition, field_defs: FieldDefs) -> LeafNode:
        field_def = field_defs.get(condition.path)
        if field_def is None:
            raise UnresolvedFieldError(condition.path)
        operator = resolve_operator(field_def.type, condition.operator, condition.value)
        value = normalize_value(operator, condition.value)
        return LeafNode(field_def.with_name(condition.path), operator, value)


def normalize_value(operator: Operator, value: Any) -> Any:
    """
    Shape ``value`` the way ``operator`` expects it.
    """
    if operator.value_mode is ValueMode.NONE:
        return False
    if operator.value_mode is ValueMode.MULTIPLE:
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]
    if isinstance(value, (list, tuple)):
        if len(value) != 1:
            raise UnsupportedDomainError(
                f"Operator '{operator.key}' expects a single value, received {list(value)!r}"
            )
        return value[0]
    return value
