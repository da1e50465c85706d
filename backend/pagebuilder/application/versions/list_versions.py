from typing import List

from pagebuilder.application.common import require_page, require_version
from pagebuilder.domain.page_version import PageVersion, newest_first, version_stats


def list_versions(*, repository, page_id: str) -> List[PageVersion]:
    """Versions of one page, newest first."""
    require_page(repository, page_id)
    return newest_first(repository.get_versions_for_page(page_id))


def get_version_content(*, repository, page_id: str, version_id: str) -> PageVersion:
    require_page(repository, page_id)
    return require_version(repository, page_id, version_id)


def get_version_stats(*, repository, page_id: str):
    require_page(repository, page_id)
    return version_stats(repository.get_versions_for_page(page_id))
