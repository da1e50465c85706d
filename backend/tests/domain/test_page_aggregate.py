import random

import pytest

from pagebuilder.domain.components import Component, ComponentKind
from pagebuilder.domain.invariants.exceptions import (
    ComponentNotFound,
    DuplicateKey,
    MinimumCardinalityViolation,
    ValidationFailed,
)
from pagebuilder.domain.page import Page


def _ids(components):
    return [c.id for c in components]


def test_add_component_rejects_duplicate_id_and_order(text_and_card_page):
    page = text_and_card_page
    text = page.get_ordered_components()[0]

    with pytest.raises(DuplicateKey):
        page.add_component(Component.create_default(ComponentKind.BANNER, order=9, component_id=text.id))
    with pytest.raises(DuplicateKey):
        page.add_component(Component.create_default(ComponentKind.BANNER, order=2))

    assert len(page.components) == 2


def test_add_component_refreshes_updated_at():
    page = Page()
    before = page.updated_at

    page.add_component(Component.create_default(ComponentKind.TEXT, order=1))

    assert page.updated_at > before


def test_added_component_is_not_aliased():
    page = Page()
    component = Component.create_default(ComponentKind.CARD, order=1)

    page.add_component(component)
    component.payload.title = "Changed outside"

    assert page.get_component_by_id(component.id).payload.title == "Card Title"


def test_invalid_update_leaves_page_unchanged(text_and_card_page):
    page = text_and_card_page
    card = page.get_components_by_kind(ComponentKind.CARD)[0]
    before = page.to_dict()

    with pytest.raises(ValidationFailed) as exc:
        page.update_component(card.id, {"data": {"title": "t" * 300, "linkTarget": "_top"}})

    assert "Component at index 1: title must not exceed 255 characters" in exc.value.errors
    assert len(exc.value.errors) == 2
    assert page.to_dict() == before


def test_update_order_collision_with_other_component(text_and_card_page):
    page = text_and_card_page
    card = page.get_components_by_kind(ComponentKind.CARD)[0]

    with pytest.raises(DuplicateKey):
        page.update_component(card.id, {"order": 1})

    # same order as itself is fine
    page.update_component(card.id, {"order": 2, "data": {"title": "Same slot"}})
    assert page.get_component_by_order(2).payload.title == "Same slot"


def test_kind_and_id_are_immutable(text_and_card_page):
    page = text_and_card_page
    card = page.get_components_by_kind(ComponentKind.CARD)[0]

    with pytest.raises(ValidationFailed):
        page.update_component(card.id, {"type": "TextComponent"})
    with pytest.raises(ValidationFailed):
        page.update_component(card.id, {"id": "other"})

    page.update_component(card.id, {"type": "CardComponent", "id": card.id, "order": 5})
    assert page.get_component_by_id(card.id).order == 5


def test_remove_component(text_and_card_page):
    page = text_and_card_page
    text = page.get_ordered_components()[0]

    page.remove_component(text.id)

    assert [c.kind for c in page.components] == [ComponentKind.CARD]
    with pytest.raises(ComponentNotFound):
        page.remove_component(text.id)


def test_page_may_become_empty(text_and_card_page):
    page = text_and_card_page
    for component in list(page.components):
        page.remove_component(component.id)
    assert page.components == []


def test_reorder_lists_first_then_rest_in_previous_order():
    page = Page()
    a, b, c, d = (
        page.add_component(Component.create_default(ComponentKind.TEXT, order=order))
        for order in (1, 2, 3, 4)
    )

    ordered = page.reorder_components([d.id, b.id])

    assert _ids(ordered) == [d.id, b.id, a.id, c.id]
    assert [c.order for c in ordered] == [1, 2, 3, 4]


def test_reorder_unknown_id_fails_without_change(text_and_card_page):
    page = text_and_card_page
    before = page.to_dict()

    with pytest.raises(ComponentNotFound):
        page.reorder_components(["missing"])

    assert page.to_dict() == before


def test_ordered_components_tolerate_unclean_imports():
    page = Page.from_dict({
        "components": [
            {"id": "b", "type": "TextComponent", "order": 2},
            {"id": "x", "type": "TextComponent", "order": "junk"},
            {"id": "a", "type": "TextComponent", "order": 1},
        ]
    })

    assert _ids(page.get_ordered_components()) == ["a", "b", "x"]
    assert not page.validate().valid


def test_initialize_from_template_maps_types():
    page = Page()
    page.add_component(Component.create_default(ComponentKind.CARD, order=1))

    page.initialize_from_template({
        "id": "landing",
        "components": [
            {"type": "banner", "defaultValues": {"headlineText": "Welcome"}},
            {"type": "LinkGroup"},
            {"type": "carousel"},
            {"type": "image", "defaultValues": {"src": "https://cdn.example.com/a.png"}},
        ],
    })

    ordered = page.get_ordered_components()
    assert [c.kind for c in ordered] == [
        ComponentKind.BANNER,
        ComponentKind.LINK_GROUP,
        ComponentKind.TEXT,
        ComponentKind.IMAGE,
    ]
    assert [c.order for c in ordered] == [1, 2, 3, 4]
    assert ordered[0].payload.headline_text == "Welcome"
    assert ordered[3].payload.data == {"src": "https://cdn.example.com/a.png"}
    assert page.template_id == "landing"


def test_initialize_from_invalid_template_keeps_components(text_and_card_page):
    page = text_and_card_page
    before = page.to_dict()

    with pytest.raises(ValidationFailed):
        page.initialize_from_template({"components": [{"type": "card", "defaultValues": {"title": ""}}]})

    assert page.to_dict() == before


def test_component_stats(text_and_card_page):
    stats = text_and_card_page.component_stats()

    assert stats["totalComponents"] == 2
    assert stats["componentsByType"] == {"TextComponent": 1, "CardComponent": 1}
    assert [entry["order"] for entry in stats["componentOrder"]] == [1, 2]


def test_nested_edits_go_through_the_page():
    page = Page()
    accordion = page.add_component(Component.create_default(ComponentKind.ACCORDION, order=1))
    only_item = accordion.payload.items[0]

    with pytest.raises(MinimumCardinalityViolation):
        page.remove_accordion_item(accordion.id, only_item.id)

    added = page.add_accordion_item(accordion.id, {"header": "Second"})
    page.remove_accordion_item(accordion.id, only_item.id)

    stored = page.get_component_by_id(accordion.id).payload
    assert [item.id for item in stored.items] == [added.id]


def test_nested_edit_on_wrong_kind(text_and_card_page):
    card = text_and_card_page.get_components_by_kind(ComponentKind.CARD)[0]
    with pytest.raises(ValidationFailed):
        text_and_card_page.add_link(card.id, {"linkText": "x"})


def test_random_mutations_keep_keys_unique():
    rng = random.Random(7)
    page = Page()
    kinds = [ComponentKind.TEXT, ComponentKind.CARD, ComponentKind.BANNER]

    for _ in range(200):
        action = rng.choice(["add", "add", "update", "remove", "reorder"])
        existing = list(page.components)
        try:
            if action == "add":
                page.add_component(
                    Component.create_default(rng.choice(kinds), order=rng.randint(0, 12))
                )
            elif action == "update" and existing:
                page.update_component(rng.choice(existing).id, {"order": rng.randint(0, 12)})
            elif action == "remove" and existing:
                page.remove_component(rng.choice(existing).id)
            elif action == "reorder" and existing:
                picked = rng.sample(existing, rng.randint(0, len(existing)))
                page.reorder_components([c.id for c in picked])
        except (DuplicateKey, ValidationFailed):
            pass

        ids = [c.id for c in page.components]
        orders = [c.order for c in page.components]
        assert len(ids) == len(set(ids))
        assert len(orders) == len(set(orders))


def test_page_round_trips_through_wire_shape(text_and_card_page):
    page = text_and_card_page
    page.add_component(Component.create_default(ComponentKind.ACCORDION, order=3))
    page.add_component(Component.create_default(ComponentKind.LINK_GROUP, order=4))

    wire = page.to_dict()

    assert Page.from_dict(wire).to_dict() == wire


def test_unhashable_component_id_is_reported_not_raised():
    page = Page.from_dict({
        "components": [
            {"id": ["a"], "type": "TextComponent", "order": 1},
            {"id": "b", "type": "TextComponent", "order": 1},
        ]
    })

    errors = page.validate().errors

    assert "Component at index 0: id must be a non-empty string" in errors
    assert "Duplicate component order found: 1" in errors
