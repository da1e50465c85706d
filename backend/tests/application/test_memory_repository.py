import pytest

from pagebuilder.domain.components import Component, ComponentKind
from pagebuilder.domain.invariants.exceptions import (
    DuplicateKey,
    PageNotFound,
    VersionNotFound,
)
from pagebuilder.domain.page import Page
from pagebuilder.domain.page_version import PageVersion


def test_reads_return_private_copies(repository, text_and_card_page):
    repository.create_page(text_and_card_page)

    loaded = repository.get_page_by_id(text_and_card_page.id)
    loaded.components[1].payload.title = "Changed without saving"

    fresh = repository.get_page_by_id(text_and_card_page.id)
    assert fresh.get_components_by_kind(ComponentKind.CARD)[0].payload.title == "Card Title"


def test_missing_page(repository):
    assert repository.get_page_by_id("nope") is None
    with pytest.raises(PageNotFound):
        repository.save_page(Page(id="nope"))
    with pytest.raises(PageNotFound):
        repository.delete_page("nope")


def test_duplicate_page_id(repository):
    page = repository.create_page(Page())
    with pytest.raises(DuplicateKey):
        repository.create_page(Page(id=page.id))


def test_versions_are_scoped_and_newest_first(repository, text_and_card_page):
    page = repository.create_page(text_and_card_page)
    other = repository.create_page(Page())
    for number in (1, 2, 3):
        repository.save_version(PageVersion.snapshot(page, version_number=number))
    repository.save_version(PageVersion.snapshot(other, version_number=1))

    numbers = [v.version_number for v in repository.get_versions_for_page(page.id)]
    assert numbers == [3, 2, 1]
    assert len(repository.get_versions_for_page(other.id)) == 1


def test_duplicate_version_number_rejected(repository, text_and_card_page):
    page = repository.create_page(text_and_card_page)
    repository.save_version(PageVersion.snapshot(page, version_number=1))
    with pytest.raises(DuplicateKey):
        repository.save_version(PageVersion.snapshot(page, version_number=1))


def test_delete_version_is_scoped_to_page(repository, text_and_card_page):
    page = repository.create_page(text_and_card_page)
    other = repository.create_page(Page())
    version = repository.save_version(PageVersion.snapshot(page, version_number=1))

    with pytest.raises(VersionNotFound):
        repository.delete_version(other.id, version.id)

    repository.delete_version(page.id, version.id)
    assert repository.get_versions_for_page(page.id) == []


def test_delete_page_drops_versions(repository, text_and_card_page):
    page = repository.create_page(text_and_card_page)
    repository.save_version(PageVersion.snapshot(page, version_number=1))

    repository.delete_page(page.id)

    assert repository.get_page_by_id(page.id) is None
    assert repository.get_versions_for_page(page.id) == []


def test_transaction_rolls_back_every_write(repository, text_and_card_page):
    page = repository.create_page(text_and_card_page)
    before = repository.get_page_by_id(page.id).to_dict()

    with pytest.raises(RuntimeError):
        with repository.transaction(page.id):
            repository.save_version(PageVersion.snapshot(page, version_number=1))
            changed = repository.get_page_by_id(page.id)
            changed.add_component(Component.create_default(ComponentKind.BANNER, order=3))
            repository.save_page(changed)
            raise RuntimeError("boom")

    assert repository.get_page_by_id(page.id).to_dict() == before
    assert repository.get_versions_for_page(page.id) == []


def test_nested_transaction_is_covered_by_outer(repository, text_and_card_page):
    page = repository.create_page(text_and_card_page)

    with pytest.raises(RuntimeError):
        with repository.transaction(page.id):
            with repository.transaction(page.id):
                repository.save_version(PageVersion.snapshot(page, version_number=1))
            raise RuntimeError("outer fails")

    assert repository.get_versions_for_page(page.id) == []


def test_list_pages(repository):
    first = repository.create_page(Page())
    second = repository.create_page(Page())
    assert {p.id for p in repository.list_pages()} == {first.id, second.id}
