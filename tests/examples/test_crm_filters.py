import asyncio

from examples.crm_filters import SAMPLE_DOMAIN, build_registry, edit_sample_domain, run_demo
from domaintree.domain import parse


def test_crm_registry_resolves_nested_paths():
    registry = build_registry()
    info = registry.resolve_path("crm.lead", "partner_id.country_id.code")
    assert not info.is_invalid
    assert info.field_def.string == "Country Code"


def test_edit_sample_domain_emits_each_change():
    changes = asyncio.run(edit_sample_domain())
    assert len(changes) == 6
    assert changes[-1] == (
        '["&", ("active", "=", True), "&", ("probability", ">=", 50.0), ("tag_ids", "!=", False)]'
    )
    for value in changes:
        parse(value)


def test_run_demo_returns_changes():
    changes = run_demo()
    assert changes
    assert parse(SAMPLE_DOMAIN).field_paths()[0] == "active"
