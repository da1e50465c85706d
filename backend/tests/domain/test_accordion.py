import pytest

from pagebuilder.domain.components import AccordionPayload
from pagebuilder.domain.invariants.exceptions import (
    DuplicateKey,
    ItemNotFound,
    MinimumCardinalityViolation,
    ValidationFailed,
)


def test_default_accordion_has_one_item():
    accordion = AccordionPayload.default()
    assert len(accordion.items) == 1
    assert accordion.validate() == []


def test_empty_accordion_is_invalid():
    assert "items must contain at least one item" in AccordionPayload(items=[]).validate()


def test_item_rules():
    accordion = AccordionPayload.from_dict({
        "items": [
            {"id": "a", "header": "", "order": 1},
            {"id": "a", "header": "h" * 256, "order": 1, "isOpen": "yes"},
        ]
    })

    errors = accordion.validate()

    assert "Item at index 0: header cannot be empty" in errors
    assert "Item at index 1: header must not exceed 255 characters" in errors
    assert "Item at index 1: isOpen must be a boolean" in errors
    assert "Duplicate item ID found: 'a'" in errors
    assert "Duplicate item order found: 1" in errors


def test_add_item_appends_with_next_order():
    accordion = AccordionPayload.with_items(2)

    item = accordion.add_item({"header": "Third"})

    assert item.order == 3
    assert item.header == "Third"
    assert item.is_open is False
    assert accordion.validate() == []


def test_add_item_rejects_order_collision():
    accordion = AccordionPayload.with_items(2)
    with pytest.raises(DuplicateKey):
        accordion.add_item({"header": "Clash", "order": 2})


def test_removing_last_item_fails_and_keeps_it():
    accordion = AccordionPayload.default()
    only = accordion.items[0]

    with pytest.raises(MinimumCardinalityViolation):
        accordion.remove_item(only.id)

    assert accordion.items == [only]


def test_remove_unknown_item():
    with pytest.raises(ItemNotFound):
        AccordionPayload.with_items(2).remove_item("missing")


def test_update_item_rewrites_content_metadata():
    accordion = AccordionPayload.with_items(2)
    item = accordion.items[0]
    created = item.content.metadata.created_at

    accordion.update_item(item.id, {"header": "  Renamed  ", "content": "<p>fresh</p>"})

    assert item.header == "Renamed"
    assert item.content.data == "<p>fresh</p>"
    assert item.content.metadata.created_at == created


def test_update_item_order_collision_is_rejected():
    accordion = AccordionPayload.with_items(2)
    first, second = accordion.items
    with pytest.raises(DuplicateKey):
        accordion.update_item(first.id, {"order": second.order})


def test_update_item_rejects_unknown_fields():
    accordion = AccordionPayload.with_items(1)
    with pytest.raises(ValidationFailed):
        accordion.update_item(accordion.items[0].id, {"colour": "red"})


def test_toggle_closes_others_when_single_open():
    accordion = AccordionPayload.with_items(3)
    accordion.allow_multiple_open = False
    first, second, third = accordion.items
    assert first.is_open

    assert accordion.toggle_item(third.id) is True

    assert [i.is_open for i in accordion.items] == [False, False, True]
    assert accordion.validate() == []


def test_toggle_leaves_others_when_multiple_open_allowed():
    accordion = AccordionPayload.with_items(2)
    first, second = accordion.items

    accordion.toggle_item(second.id)

    assert first.is_open and second.is_open


def test_switching_to_single_open_keeps_open_items():
    accordion = AccordionPayload.with_items(2)
    accordion.items[1].is_open = True

    single = accordion.merged({"allowMultipleOpen": False})

    assert single.validate() == []
    assert len(single.open_items()) == 2


@pytest.mark.parametrize("items", [["x"], [{"header": "ok"}, 42]])
def test_non_object_items_are_rejected(items):
    with pytest.raises(ValidationFailed) as exc:
        AccordionPayload.from_dict({"items": items})
    assert any("must be an object" in err for err in exc.value.errors)


def test_non_array_items_are_rejected():
    with pytest.raises(ValidationFailed) as exc:
        AccordionPayload.from_dict({"items": "nope"})
    assert exc.value.errors == ["items must be an array"]


def test_non_object_item_metadata_is_rejected():
    with pytest.raises(ValidationFailed) as exc:
        AccordionPayload.from_dict({"items": [{"content": {"data": "<p>x</p>", "metadata": "junk"}}]})
    assert exc.value.errors == ["metadata must be an object"]


def test_reorder_items_appends_unlisted():
    accordion = AccordionPayload.with_items(3)
    a, b, c = accordion.items

    accordion.reorder_items([c.id])

    assert [i.id for i in accordion.get_ordered_items()] == [c.id, a.id, b.id]
    assert [i.order for i in accordion.get_ordered_items()] == [1, 2, 3]


def test_reorder_items_rejects_unknown_and_repeated_ids():
    accordion = AccordionPayload.with_items(2)
    with pytest.raises(ItemNotFound):
        accordion.reorder_items(["nope"])
    with pytest.raises(ValidationFailed):
        first = accordion.items[0].id
        accordion.reorder_items([first, first])
