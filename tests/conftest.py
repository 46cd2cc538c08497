import pytest

from domaintree.fields import FieldDef, SchemaFieldService, SchemaRegistry


@pytest.fixture
def registry():
    registry = SchemaRegistry()
    registry.register_model(
        "res.country",
        [FieldDef(name="name", type="char"), FieldDef(name="code", type="char")],
    )
    registry.register_model(
        "res.partner",
        [
            FieldDef(name="name", type="char"),
            FieldDef(name="country_id", type="many2one", relation="res.country"),
        ],
    )
    registry.register_model(
        "res.users",
        [
            FieldDef(name="name", type="char"),
            FieldDef(name="age", type="integer"),
            FieldDef(name="active", type="boolean"),
            FieldDef(name="score", type="float"),
            FieldDef(name="birthday", type="date"),
            FieldDef(
                name="state",
                type="selection",
                selection=[("draft", "Draft"), ("done", "Done")],
            ),
            FieldDef(name="partner_id", type="many2one", relation="res.partner"),
        ],
    )
    return registry


@pytest.fixture
def field_service(registry):
    return SchemaFieldService(registry)


@pytest.fixture
def field_defs():
    return {
        "name": FieldDef(name="name", type="char"),
        "age": FieldDef(name="age", type="integer"),
        "active": FieldDef(name="active", type="boolean"),
        "state": FieldDef(
            name="state", type="selection", selection=[("draft", "Draft"), ("done", "Done")]
        ),
        "partner_id.name": FieldDef(name="name", type="char"),
        0: FieldDef(name=0, type="integer"),
        1: FieldDef(name=1, type="integer"),
    }
