from domaintree.domain import Connective, parse
from domaintree.fields import FieldDef
from domaintree.registry import find_operator
from domaintree.tree import BranchNode, DomainTreeBuilder, LeafNode


def make_leaf(name, value, operator="="):
    return LeafNode(FieldDef(name=name, type="integer"), find_operator(operator), value)


def build(text, field_defs):
    return DomainTreeBuilder().build(parse(text), field_defs)


def test_insert_after_then_delete_restores_structure():
    a, b = make_leaf("a", 1), make_leaf("b", 2)
    root = BranchNode(Connective.AND, [a, b])
    before = root.structure()

    c = make_leaf("c", 3)
    root.insert_after(a.id, c)
    assert [child.field.name for child in root.children] == ["a", "c", "b"]
    assert c.parent is root

    root.delete(c.id)
    assert root.structure() == before
    assert c.parent is None


def test_insert_after_unknown_sibling_is_noop():
    a = make_leaf("a", 1)
    root = BranchNode(Connective.AND, [a])
    root.insert_after(a.id + 1000, make_leaf("c", 3))
    assert root.children == [a]


def test_delete_unknown_child_is_noop():
    a = make_leaf("a", 1)
    root = BranchNode(Connective.AND, [a])
    root.delete(-1)
    assert root.children == [a]


def test_add_appends_child():
    root = BranchNode(Connective.OR)
    leaf = make_leaf("a", 1)
    root.add(leaf)
    assert root.children == [leaf]
    assert root.find(leaf.id) is leaf


def test_clone_assigns_fresh_ids_and_copies_attributes():
    branch = BranchNode(Connective.OR, [make_leaf("a", [1, 2], "in"), make_leaf("b", 2)])
    clone = branch.clone()

    original_ids = {node.id for node in branch.walk()}
    assert original_ids.isdisjoint(node.id for node in clone.walk())
    assert clone.structure() == branch.structure()
    assert clone.parent is None
    assert all(child.parent is clone for child in clone.children)

    clone.children[0].value.append(3)
    assert branch.children[0].value == [1, 2]


def test_deleting_to_single_child_collapses_branch(field_defs):
    root = build('["&", ("age", "=", 1), "|", ("age", "=", 2), ("age", "=", 3)]', field_defs)
    disjunction = root.children[1]
    remaining = disjunction.children[0]

    disjunction.delete(disjunction.children[1].id)

    assert root.children[1] is remaining
    assert remaining.parent is root
    assert str(root.to_domain()) == '["&", ("age", "=", 1), ("age", "=", 2)]'


def test_collapsed_branch_merges_into_matching_parent(field_defs):
    root = build(
        '["&", ("age", "=", 1), "|", ("age", "=", 2), "&", ("age", "=", 3), ("age", "=", 4)]',
        field_defs,
    )
    disjunction = root.children[1]
    disjunction.delete(disjunction.children[0].id)
    assert [child.value for child in root.children] == [1, 3, 4]
    assert all(child.parent is root for child in root.children)


def test_deleting_last_child_removes_branch_from_parent(field_defs):
    root = build('["&", ("age", "=", 1), "!", ("age", "=", 2)]', field_defs)
    first, negation = root.children
    negation.delete(negation.children[0].id)
    assert root.children == [first]
    assert negation.parent is None
    assert str(root.to_domain()) == '[("age", "=", 1)]'


def test_root_keeps_operator_over_a_single_leaf(field_defs):
    root = build('["|", ("age", "=", 1), ("age", "=", 2)]', field_defs)
    root.delete(root.children[0].id)
    assert root.operator is Connective.OR
    assert len(root.children) == 1
    root.delete(root.children[0].id)
    assert root.children == []
    assert str(root.to_domain()) == "[]"


def test_deletes_keep_tree_equal_to_its_reparse(field_defs):
    root = build(
        '["|", "&", ("age", "=", 1), ("name", "=", "a"), "&", ("age", "=", 2), "!", ("active", "=", True)]',
        field_defs,
    )
    conjunction = root.children[1]
    conjunction.delete(conjunction.children[1].id)
    rebuilt = build(str(root.to_domain()), field_defs)
    assert rebuilt.structure() == root.structure()


def test_root_takes_over_a_single_remaining_branch(field_defs):
    root = build('["&", ("age", "=", 1), "|", ("age", "=", 2), ("age", "=", 3)]', field_defs)
    disjunction = root.children[1]
    root.delete(root.children[0].id)

    assert root.parent is None
    assert root.operator is Connective.OR
    assert [child.value for child in root.children] == [2, 3]
    assert all(child.parent is root for child in root.children)
    assert disjunction.parent is None and disjunction.children == []
    rebuilt = build(str(root.to_domain()), field_defs)
    assert rebuilt.structure() == root.structure()


def test_root_keeps_a_single_negation(field_defs):
    root = build('["&", ("age", "=", 1), "!", ("age", "=", 2)]', field_defs)
    root.delete(root.children[0].id)
    assert root.operator is Connective.AND
    assert root.children[0].operator is Connective.NOT
    assert build(str(root.to_domain()), field_defs).structure() == root.structure()


def test_insert_after_inside_negation_groups_operands(field_defs):
    root = build('["!", ("age", "=", 1)]', field_defs)
    negation = root.children[0]
    original = negation.children[0]

    negation.insert_after(original.id, make_leaf("age", 2))

    assert len(negation.children) == 1
    group = negation.children[0]
    assert group.operator is Connective.AND and group.parent is negation
    assert [child.value for child in group.children] == [1, 2]
    assert all(child.parent is group for child in group.children)
    text = str(root.to_domain())
    assert text == '["!", "&", ("age", "=", 1), ("age", "=", 2)]'
    assert build(text, field_defs).structure() == root.structure()


def test_add_to_negation_reuses_existing_group(field_defs):
    root = build('["!", "&", ("age", "=", 1), ("age", "=", 2)]', field_defs)
    negation = root.children[0]
    group = negation.children[0]

    negation.add(make_leaf("age", 3))
    negation.insert_after(group.id, make_leaf("age", 4))

    assert negation.children == [group]
    assert [child.value for child in group.children] == [1, 2, 3, 4]


def test_deleting_inside_negation_group_unwraps_it(field_defs):
    root = build('["!", ("age", "=", 1)]', field_defs)
    negation = root.children[0]
    negation.add(make_leaf("age", 2))
    group = negation.children[0]

    group.delete(group.children[1].id)

    assert len(negation.children) == 1
    assert negation.children[0].value == 1
    assert str(root.to_domain()) == '["!", ("age", "=", 1)]'


def test_leaf_to_domain_emits_triple():
    leaf = make_leaf("age", 10)
    assert str(leaf.to_domain()) == '[("age", "=", 10)]'
    leaf.operator = find_operator("set")
    assert str(leaf.to_domain()) == '[("age", "!=", False)]'


def test_root_walks_up_parents(field_defs):
    root = build('["&", ("age", "=", 1), "!", ("age", "=", 2)]', field_defs)
    deepest = root.children[1].children[0]
    assert deepest.root() is root
