import pytest

from domaintree.domain import Domain, parse
from domaintree.errors import (
    DomainParseError,
    UnresolvedFieldError,
    UnsupportedDomainError,
    UnsupportedOperatorError,
)
from domaintree.domain import Condition, Connective
from domaintree.registry import ValueMode
from domaintree.tree import BranchNode, DomainTreeBuilder, LeafNode


def build(text, field_defs):
    return DomainTreeBuilder().build(parse(text), field_defs)


def assert_arity(node, is_root=True):
    if isinstance(node, BranchNode):
        if node.operator is Connective.NOT:
            assert len(node.children) == 1
        elif not is_root:
            assert len(node.children) >= 2
        for child in node.children:
            assert_arity(child, is_root=False)


def test_empty_domain_builds_empty_and_root(field_defs):
    root = build("[]", field_defs)
    assert root.operator is Connective.AND
    assert root.children == []
    assert str(root.to_domain()) == "[]"


def test_single_leaf_is_wrapped_in_and_root(field_defs):
    root = build('[("age", ">", 18)]', field_defs)
    assert root.operator is Connective.AND
    (leaf,) = root.children
    assert isinstance(leaf, LeafNode)
    assert leaf.field.name == "age"
    assert leaf.operator.key == ">"
    assert leaf.value == 18
    assert leaf.parent is root


def test_top_level_or_becomes_root(field_defs):
    root = build('["|", ("age", "=", 1), ("name", "=", "x")]', field_defs)
    assert root.operator is Connective.OR
    assert len(root.children) == 2


def test_nested_same_operator_branches_are_merged(field_defs):
    right = build('["&", ("age", "=", 1), "&", ("age", "=", 2), ("age", "=", 3)]', field_defs)
    left = build('["&", "&", ("age", "=", 1), ("age", "=", 2), ("age", "=", 3)]', field_defs)
    assert right.structure() == left.structure()
    assert [child.value for child in right.children] == [1, 2, 3]


def test_not_is_a_single_child_branch(field_defs):
    root = build('["!", "|", ("age", "=", 1), ("name", "=", "x")]', field_defs)
    (negation,) = root.children
    assert negation.operator is Connective.NOT
    (inner,) = negation.children
    assert inner.operator is Connective.OR
    assert_arity(root)


def test_arity_invariant_after_build(field_defs):
    root = build(
        '["&", "|", ("age", "=", 1), "!", ("name", "=", "a"), "|", ("age", "=", 2), '
        '"&", ("active", "=", True), ("state", "in", ["done"])]',
        field_defs,
    )
    assert_arity(root)


def test_values_follow_operator_value_mode(field_defs):
    root = build(
        '["&", ("age", "in", 5), "&", ("name", "=", ["x"]), ("state", "!=", False)]',
        field_defs,
    )
    leaves = [node for node in root.walk() if isinstance(node, LeafNode)]
    assert [leaf.value for leaf in leaves] == [[5], "x", False]
    for leaf in leaves:
        if leaf.operator.value_mode is ValueMode.MULTIPLE:
            assert isinstance(leaf.value, list)
        elif leaf.operator.value_mode is ValueMode.NONE:
            assert leaf.value is False
        else:
            assert not isinstance(leaf.value, list)
    assert leaves[2].operator.key == "set"


def test_true_and_false_leaves_use_pseudo_fields(field_defs):
    root = build('["|", (1, "=", 1), (0, "=", 1)]', field_defs)
    assert [leaf.field.name for leaf in root.children] == [1, 0]
    assert all(leaf.field.type == "integer" for leaf in root.children)
    assert str(root.to_domain()) == '["|", (1, "=", 1), (0, "=", 1)]'


def test_leaf_field_keeps_full_path(field_defs):
    root = build('[("partner_id.name", "ilike", "acme")]', field_defs)
    assert root.children[0].field.name == "partner_id.name"


def test_unresolved_field_aborts_whole_build(field_defs):
    field_defs = dict(field_defs, missing=None)
    with pytest.raises(UnresolvedFieldError) as excinfo:
        build('["&", ("age", "=", 1), ("missing", "=", 2)]', field_defs)
    assert excinfo.value.path == "missing"


def test_unknown_operator_aborts_build(field_defs):
    with pytest.raises(UnsupportedOperatorError):
        build('[("name", "=?", "x")]', field_defs)


def test_multi_value_list_for_single_operator_is_unsupported(field_defs):
    with pytest.raises(UnsupportedDomainError):
        build('[("age", "=", [1, 2])]', field_defs)


def test_malformed_token_sequence_is_rejected(field_defs):
    domain = Domain((Connective.AND, Condition("age", "=", 1)))
    with pytest.raises(DomainParseError):
        DomainTreeBuilder().build(domain, field_defs)


def test_unknown_symbol_on_other_type_is_offered_ad_hoc(field_defs):
    root = build('[("active", "ilike", "x")]', field_defs)
    assert root.children[0].operator.key == "ilike"


@pytest.mark.parametrize(
    "text",
    [
        "[]",
        '[("age", "=", 10)]',
        '["|", ("age", "=", 10), ("name", "ilike", "bob")]',
        '["&", ("age", "in", [1, 2]), "!", ("state", "=", False)]',
        '["&", "|", ("age", ">=", 1), ("age", "<", 0), "&", ("active", "=", True), (1, "=", 1)]',
        '["!", "&", ("partner_id.name", "not ilike", "x"), ("name", "!=", False)]',
        '["|", "|", ("age", "=", 1), ("age", "=", 2), ("age", "=", 3)]',
    ],
)
def test_round_trip_is_structurally_stable(field_defs, text):
    first = build(text, field_defs)
    serialized = str(first.to_domain())
    second = build(serialized, field_defs)
    assert second.structure() == first.structure()
    assert str(second.to_domain()) == serialized
    first_ids = {node.id for node in first.walk()}
    assert first_ids.isdisjoint(node.id for node in second.walk())
