from .page import normalize_page_summary
from .version import normalize_version, normalize_version_ref


def normalize_revert(result):
    return {
        "revertedTo": normalize_version_ref(result.reverted_to),
        "backupVersion": normalize_version(result.backup) if result.backup else None,
        "updatedPage": normalize_page_summary(result.page),
    }
