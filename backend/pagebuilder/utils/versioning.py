def next_version(repository, page_id):
    versions = repository.get_versions_for_page(page_id)
    last = max((v.version_number for v in versions), default=0)
    return last + 1


def backup_version_name(target_number):
    return f"Backup before revert to v{target_number}"


def backup_change_description(target_number):
    return f"Automatic backup created before reverting to version {target_number}"
