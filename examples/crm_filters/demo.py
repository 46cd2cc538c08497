"""
Utility helpers for running the domaintree CRM example end-to-end.
"""

from __future__ import annotations

import asyncio
from typing import List

from domaintree import DomainSelector, SelectorConfig
from domaintree.fields import InMemoryFieldCache, SchemaFieldService
from domaintree.tree import BranchNode, LeafNode

from .models import build_registry

MODEL = "crm.lead"
SAMPLE_DOMAIN = (
    '["&", ("active", "=", True), "|", ("partner_id.country_id.code", "=", "BE"), '
    '("tag_ids", "in", [1, 2])]'
)


def make_selector(changes: List[str]) -> DomainSelector:
    """
    Create a selector over ``crm.lead`` recording every emitted domain.
    """

    service = SchemaFieldService(build_registry(), cache=InMemoryFieldCache())
    config = SelectorConfig(readonly=False, default_leaf_value=("name", "ilike", ""))

    def update(value: str, is_debug: bool = False) -> None:
        changes.append(value)

    return DomainSelector(MODEL, service, config=config, update=update)


async def edit_sample_domain() -> List[str]:
    """
    Load the sample domain and walk through a few typical edits.
    """

    changes: List[str] = []
    selector = make_selector(changes)
    if not await selector.load(SAMPLE_DOMAIN):
        return changes

    root = selector.tree.root
    active, countries = root.children
    assert isinstance(active, LeafNode) and isinstance(countries, BranchNode)

    selector.insert_leaf(root, active)
    new_leaf = root.children[1]
    assert isinstance(new_leaf, LeafNode)
    await selector.update_field(new_leaf, "probability")
    selector.update_leaf_operator(new_leaf, ">=")
    selector.update_leaf_value(new_leaf, 50.0)

    tag_leaf = countries.children[1]
    assert isinstance(tag_leaf, LeafNode)
    selector.update_leaf_operator(tag_leaf, "set")
    selector.delete(countries, countries.children[0])
    return changes


def run_demo() -> List[str]:
    changes = asyncio.run(edit_sample_domain())
    for value in changes:
        print(value)
    return changes


if __name__ == "__main__":
    run_demo()
