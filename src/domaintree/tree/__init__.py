"""
Editable domain trees and their builder.
"""

from .builder import DomainTreeBuilder, normalize_value
from .nodes import BranchNode, DomainNode, LeafNode, next_node_id

__all__ = [
    "BranchNode",
    "DomainNode",
    "DomainTreeBuilder",
    "LeafNode",
    "next_node_id",
    "normalize_value",
]
