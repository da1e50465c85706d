import logging

import pytest

from pagebuilder.application.pages.accordion_items import (
    add_accordion_item,
    remove_accordion_item,
    reorder_accordion_items,
    toggle_accordion_item,
    update_accordion_item,
)
from pagebuilder.application.pages.add_component import add_component
from pagebuilder.application.pages.create_page import create_page
from pagebuilder.application.pages.delete_page import delete_page
from pagebuilder.application.pages.initialize_from_template import initialize_from_template
from pagebuilder.application.pages.links import add_link, remove_link, reorder_links, update_link
from pagebuilder.application.pages.remove_component import remove_component
from pagebuilder.application.pages.reorder_components import reorder_components
from pagebuilder.application.pages.update_component import update_component
from pagebuilder.domain.components import ComponentKind
from pagebuilder.domain.invariants.exceptions import (
    ConcurrentModification,
    ItemNotFound,
    MinimumCardinalityViolation,
    PageNotFound,
    ValidationFailed,
)


@pytest.fixture
def page(repository):
    return create_page(repository=repository)


def test_add_component_appends_order_and_persists(repository, page):
    first = add_component(repository=repository, page_id=page.id, component_type="TextComponent")
    second = add_component(
        repository=repository,
        page_id=page.id,
        component_type="CardComponent",
        data={"title": "Pricing"},
    )

    stored = repository.get_page_by_id(page.id)
    assert (first.order, second.order) == (1, 2)
    assert stored.get_component_by_id(second.id).payload.title == "Pricing"


def test_add_component_to_missing_page(repository):
    with pytest.raises(PageNotFound):
        add_component(repository=repository, page_id="missing", component_type="TextComponent")


def test_failed_update_is_not_persisted(repository, page):
    card = add_component(repository=repository, page_id=page.id, component_type="CardComponent")
    before = repository.get_page_by_id(page.id).to_dict()

    with pytest.raises(ValidationFailed):
        update_component(
            repository=repository,
            page_id=page.id,
            component_id=card.id,
            changes={"data": {"imageUrl": "not a url"}},
        )

    assert repository.get_page_by_id(page.id).to_dict() == before


def test_update_needs_order_or_data(repository, page):
    card = add_component(repository=repository, page_id=page.id, component_type="CardComponent")
    with pytest.raises(ValidationFailed):
        update_component(repository=repository, page_id=page.id, component_id=card.id, changes={"title": "x"})


def test_precondition_runs_before_mutation(repository, page):
    def reject(_page):
        raise ConcurrentModification("stale")

    with pytest.raises(ConcurrentModification):
        add_component(
            repository=repository,
            page_id=page.id,
            component_type="TextComponent",
            precondition=reject,
        )

    assert repository.get_page_by_id(page.id).components == []


def test_remove_and_reorder(repository, page):
    a = add_component(repository=repository, page_id=page.id, component_type="TextComponent")
    b = add_component(repository=repository, page_id=page.id, component_type="BannerComponent")
    c = add_component(repository=repository, page_id=page.id, component_type="CardComponent")

    ordered = reorder_components(repository=repository, page_id=page.id, component_ids=[c.id, a.id])
    assert [x.id for x in ordered] == [c.id, a.id, b.id]

    remove_component(repository=repository, page_id=page.id, component_id=a.id)
    stored = repository.get_page_by_id(page.id)
    assert [x.id for x in stored.get_ordered_components()] == [c.id, b.id]


def test_reorder_needs_a_list_of_ids(repository, page):
    with pytest.raises(ValidationFailed):
        reorder_components(repository=repository, page_id=page.id, component_ids="abc")


def test_create_page_from_template(repository):
    page = create_page(
        repository=repository,
        template={"id": "tpl", "components": [{"type": "banner"}, {"type": "card"}]},
    )

    stored = repository.get_page_by_id(page.id)
    assert stored.template_id == "tpl"
    assert [c.kind for c in stored.get_ordered_components()] == [ComponentKind.BANNER, ComponentKind.CARD]


def test_initialize_replaces_components(repository, page):
    add_component(repository=repository, page_id=page.id, component_type="CardComponent")

    initialize_from_template(
        repository=repository,
        page_id=page.id,
        template={"components": [{"type": "text"}, {"type": "accordion"}]},
    )

    stored = repository.get_page_by_id(page.id)
    assert [c.kind for c in stored.get_ordered_components()] == [ComponentKind.TEXT, ComponentKind.ACCORDION]


def test_delete_page(repository, page):
    delete_page(repository=repository, page_id=page.id)
    assert repository.get_page_by_id(page.id) is None


def test_accordion_item_flow(repository, page):
    accordion = add_component(repository=repository, page_id=page.id, component_type="AccordionComponent")
    first = accordion.payload.items[0]
    kwargs = {"repository": repository, "page_id": page.id, "component_id": accordion.id}

    second = add_accordion_item(data={"header": "FAQ 2"}, **kwargs)
    update_accordion_item(item_id=second.id, changes={"content": "<p>Answer</p>"}, **kwargs)
    assert toggle_accordion_item(item_id=second.id, **kwargs) is True
    reorder_accordion_items(item_ids=[second.id], **kwargs)
    remove_accordion_item(item_id=first.id, **kwargs)

    stored = repository.get_page_by_id(page.id).get_component_by_id(accordion.id).payload
    assert [(i.id, i.order, i.is_open) for i in stored.items] == [(second.id, 1, True)]
    assert stored.items[0].content.data == "<p>Answer</p>"

    with pytest.raises(MinimumCardinalityViolation):
        remove_accordion_item(item_id=second.id, **kwargs)
    with pytest.raises(ItemNotFound):
        toggle_accordion_item(item_id=first.id, **kwargs)


def test_link_flow(repository, page):
    group = add_component(repository=repository, page_id=page.id, component_type="LinkGroupComponent")
    original = group.payload.links[0]
    kwargs = {"repository": repository, "page_id": page.id, "component_id": group.id}

    docs = add_link(data={"linkText": "Docs", "linkUrl": "https://docs.example.com"}, **kwargs)
    update_link(link_id=docs.id, changes={"linkTarget": "_blank"}, **kwargs)
    reorder_links(link_ids=[docs.id, original.id], **kwargs)
    remove_link(link_id=original.id, **kwargs)

    stored = repository.get_page_by_id(page.id).get_component_by_id(group.id).payload
    assert [(link.link_text, link.order, link.link_target) for link in stored.links] == [("Docs", 0, "_blank")]

    with pytest.raises(MinimumCardinalityViolation):
        remove_link(link_id=docs.id, **kwargs)


def test_mutations_are_audited(repository, page, caplog):
    caplog.set_level(logging.INFO, logger="pagebuilder.audit")

    component = add_component(repository=repository, page_id=page.id, component_type="TextComponent", actor_id="u1")

    records = [r for r in caplog.records if r.name == "pagebuilder.audit"]
    assert records[-1].audit["action"] == "component.add"
    assert records[-1].audit["actor_id"] == "u1"
    assert records[-1].audit["payload"]["component_id"] == component.id
