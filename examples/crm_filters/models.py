"""
Model schemas for the domaintree CRM example.
"""

from __future__ import annotations

from domaintree.fields import FieldDef, SchemaRegistry


def build_registry() -> SchemaRegistry:
    registry = SchemaRegistry()
    registry.register_model(
        "res.country",
        [
            FieldDef(name="name", type="char"),
            FieldDef(name="code", type="char", string="Country Code"),
        ],
    )
    registry.register_model(
        "res.partner",
        [
            FieldDef(name="name", type="char"),
            FieldDef(name="email", type="char"),
            FieldDef(name="is_company", type="boolean"),
            FieldDef(name="country_id", type="many2one", relation="res.country"),
        ],
    )
    registry.register_model(
        "crm.tag",
        [FieldDef(name="name", type="char")],
    )
    registry.register_model(
        "crm.lead",
        [
            FieldDef(name="name", type="char", string="Opportunity"),
            FieldDef(name="active", type="boolean"),
            FieldDef(name="probability", type="float"),
            FieldDef(name="expected_revenue", type="monetary"),
            FieldDef(name="date_deadline", type="date", string="Expected Closing"),
            FieldDef(
                name="priority",
                type="selection",
                selection=[("0", "Low"), ("1", "Medium"), ("2", "High")],
            ),
            FieldDef(name="partner_id", type="many2one", relation="res.partner"),
            FieldDef(name="tag_ids", type="many2many", relation="crm.tag"),
        ],
    )
    return registry
