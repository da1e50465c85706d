import threading
from concurrent.futures import ThreadPoolExecutor

from pagebuilder.application.pages.add_component import add_component
from pagebuilder.application.pages.create_page import create_page
from pagebuilder.application.versions.create_version import create_version
from pagebuilder.application.versions.revert_page import revert_page
from pagebuilder.repositories.memory import InMemoryPageRepository

WORKERS = 16


def _run_together(count, fn):
    barrier = threading.Barrier(count)

    def task(index):
        barrier.wait()
        return fn(index)

    with ThreadPoolExecutor(max_workers=count) as pool:
        return list(pool.map(task, range(count)))


def test_concurrent_snapshots_get_consecutive_numbers(repository):
    page = create_page(repository=repository)
    create_version(repository=repository, page_id=page.id)
    create_version(repository=repository, page_id=page.id)

    versions = _run_together(WORKERS, lambda _: create_version(repository=repository, page_id=page.id))

    numbers = sorted(v.version_number for v in versions)
    assert numbers == list(range(3, 3 + WORKERS))


def test_concurrent_adds_keep_orders_unique(repository):
    page = create_page(repository=repository)

    added = _run_together(
        WORKERS,
        lambda _: add_component(repository=repository, page_id=page.id, component_type="TextComponent"),
    )

    stored = repository.get_page_by_id(page.id)
    assert sorted(c.order for c in added) == list(range(1, WORKERS + 1))
    assert len(stored.components) == WORKERS
    assert len({c.order for c in stored.components}) == WORKERS


def test_concurrent_reverts_and_snapshots_never_share_numbers(repository):
    page = create_page(repository=repository)
    add_component(repository=repository, page_id=page.id, component_type="TextComponent")
    base = create_version(repository=repository, page_id=page.id)

    def work(index):
        if index % 2:
            add_component(repository=repository, page_id=page.id, component_type="CardComponent")
            return create_version(repository=repository, page_id=page.id)
        return revert_page(repository=repository, page_id=page.id, version_id=base.id)

    _run_together(WORKERS, work)

    numbers = [v.version_number for v in repository.get_versions_for_page(page.id)]
    assert len(numbers) == len(set(numbers))
    assert sorted(numbers) == list(range(1, len(numbers) + 1))


def test_pages_do_not_block_each_other():
    repository = InMemoryPageRepository()
    pages = [create_page(repository=repository) for _ in range(4)]
    entered = threading.Barrier(2, timeout=5)

    with repository.transaction(pages[0].id):
        # a second thread can take another page's lock while this one is held
        def other():
            with repository.transaction(pages[1].id):
                entered.wait()

        worker = threading.Thread(target=other)
        worker.start()
        entered.wait()
        worker.join(timeout=5)

    assert not worker.is_alive()
