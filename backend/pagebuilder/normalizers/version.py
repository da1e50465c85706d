from pagebuilder.utils.timestamps import to_iso


def normalize_version(version, include_components=False):
    if include_components:
        return version.to_dict()
    return version.metadata()


def normalize_version_ref(version):
    return {
        "id": version.id,
        "versionNumber": version.version_number,
        "timestamp": to_iso(version.timestamp),
    }
