"""
Selector controller owning an editable domain tree.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from ..config import SelectorConfig
from ..domain.parser import DomainSource, parse
from ..domain.tokens import Connective, Domain
from ..errors import DomainError, UnresolvedFieldError, UnsupportedDomainError
from ..fields.service import FieldService, load_field_def, load_field_defs
from ..registry.fields import (
    EditorInfo,
    get_default_operator,
    get_default_value,
    get_editor_info,
    get_operators_info,
    migrate_value,
)
from ..registry.operators import Operator, find_operator
from ..tree.builder import DomainTreeBuilder
from ..tree.nodes import BranchNode, DomainNode, LeafNode
from ..utils.logging import get_logger, set_correlation_id, time_call
from .events import CHANGE, REBUILD, EventDispatcher

logger = get_logger("selector")

UpdateHandler = Callable[..., None]


@dataclass
class TreeState:
    is_supported: bool = False
    root: BranchNode = field(default_factory=lambda: BranchNode(Connective.AND))


class DomainSelector:
    """
    Loads a domain into an editable tree and applies user edits to it.

    Every committed edit serializes the tree and fires the ``change`` event
    with the new domain text; ``update`` passed at construction is registered
    as a ``change`` handler and receives ``(domain, is_debug=...)``.
    """

    def __init__(
        self,
        model: str,
        field_service: FieldService,
        *,
        config: SelectorConfig | None = None,
        update: UpdateHandler | None = None,
        tree_builder: DomainTreeBuilder | None = None,
    ) -> None:
        self.model = model
        self.field_service = field_service
        self.config = config or SelectorConfig()
        self.tree_builder = tree_builder or DomainTreeBuilder()
        self.tree = TreeState()
        self.default_leaf: Optional[LeafNode] = None
        self.events = EventDispatcher()
        if update is not None:
            self.events.register(CHANGE, update)
        self._generation = 0

    @property
    def readonly(self) -> bool:
        return self.config.readonly

    # Loading ------------------------------------------------------------
    async def load(self, value: DomainSource) -> bool:
        """
        Rebuild the tree from ``value``.

        Returns whether the domain is supported. Unsupported domains leave an
        empty root and ``tree.is_supported`` set to False. A load overtaken by
        a newer one is discarded and returns False.
        """
        self._generation += 1
        generation = self._generation
        set_correlation_id()
        text = value if isinstance(value, str) else repr(value)
        try:
            domain = parse(value)
            default_domain = parse([self.config.default_leaf_value])
            field_defs, default_defs = await asyncio.gather(
                load_field_defs(self.field_service, self.model, domain.field_paths()),
                load_field_defs(self.field_service, self.model, default_domain.field_paths()),
            )
            if generation != self._generation:
                logger.debug("Discarding stale load of %s", text)
                return False
            with time_call(
                "domain tree build", logger, domain=text, threshold_ms=self.config.build_warning_ms
            ):
                root = self.tree_builder.build(domain, field_defs)
                default_leaf = self.tree_builder.build(default_domain, default_defs).children[0]
            if not isinstance(default_leaf, LeafNode):
                raise UnsupportedDomainError("Default leaf must be a single condition")
        except UnsupportedDomainError as exc:
            if generation != self._generation:
                logger.debug("Discarding stale load of %s", text)
                return False
            logger.info("Domain %s on %s is not supported: %s", text, self.model, exc)
            self.tree.is_supported = False
            self.tree.root = self.tree_builder.build(Domain(), {})
            self.events.fire(REBUILD, self.tree)
            return False

        self.tree.root = root
        self.tree.is_supported = True
        self.default_leaf = default_leaf
        self.events.fire(REBUILD, self.tree)
        return True

    # Notifications --------------------------------------------------------
    def to_domain(self) -> Domain:
        return self.tree.root.to_domain()

    def notify_changes(self) -> str:
        value = str(self.to_domain())
        logger.debug("Domain changed to %s", value)
        self.events.fire(CHANGE, value, is_debug=False)
        return value

    def on_debug_value_change(self, value: str) -> None:
        self.events.fire(CHANGE, value, is_debug=True)

    # Node factories -------------------------------------------------------
    def create_new_leaf(self) -> LeafNode:
        if self.default_leaf is None:
            raise DomainError("No default leaf available, load a supported domain first")
        return self.default_leaf.clone()

    def create_new_branch(self, operator: Connective | str) -> BranchNode:
        return BranchNode(operator, [self.create_new_leaf(), self.create_new_leaf()])

    # Structural edits -----------------------------------------------------
    def insert_root_leaf(self, parent: BranchNode) -> None:
        parent.add(self.create_new_leaf())
        self.notify_changes()

    def insert_leaf(self, parent: BranchNode, node: DomainNode) -> None:
        parent.insert_after(node.id, self.create_new_leaf())
        self.notify_changes()

    def insert_branch(self, parent: BranchNode, node: DomainNode) -> None:
        parent.insert_after(node.id, self.create_new_branch(parent.operator.opposite()))
        self.notify_changes()

    def delete(self, parent: BranchNode, node: DomainNode) -> None:
        parent.delete(node.id)
        self.notify_changes()

    def update_branch_operator(self, node: BranchNode, operator: Connective | str) -> None:
        operator = Connective(operator)
        if operator is Connective.NOT or node.operator is Connective.NOT:
            raise ValueError("Only AND/OR branches can switch operator")
        node.operator = operator
        # Keep AND-in-AND / OR-in-OR merged so the tree matches its reparse.
        for child in list(node.children):
            if isinstance(child, BranchNode):
                node.replace(child.id, child)
        if node.parent is not None:
            node.parent.replace(node.id, node)
        self.notify_changes()

    # Leaf edits -----------------------------------------------------------
    async def update_field(self, node: LeafNode, path: str) -> None:
        """
        Point ``node`` at ``path`` with that field type's default operator and value.

        Paths come from the field picker, so an unresolvable one is a caller
        error: :class:`UnresolvedFieldError` is raised and ``node`` is left
        untouched.
        """
        field_def = await load_field_def(self.field_service, self.model, path)
        if field_def is None:
            raise UnresolvedFieldError(path)
        node.field = field_def.with_name(path)
        node.operator = get_default_operator(field_def.type)
        node.value = get_default_value(node.operator, node.field)
        self.notify_changes()

    def update_leaf_operator(self, node: LeafNode, operator: str) -> None:
        previous = node.operator
        node.operator = find_operator(operator)
        node.value = migrate_value(previous, node.operator, node.value, node.field)
        self.notify_changes()

    def update_leaf_value(self, node: LeafNode, value: Any) -> None:
        node.value = value
        self.notify_changes()

    # Editor metadata ------------------------------------------------------
    def get_editor_info(self, node: LeafNode) -> EditorInfo:
        return get_editor_info(node.field.type, node.operator.key)

    def get_operators_info(self, node: LeafNode) -> List[Operator]:
        operators = get_operators_info(node.field.type)
        if not any(operator.key == node.operator.key for operator in operators):
            operators.append(node.operator)
        return operators
