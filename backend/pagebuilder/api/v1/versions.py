from flask import current_app, jsonify

from pagebuilder.application.versions.create_version import create_version
from pagebuilder.application.versions.delete_version import delete_version
from pagebuilder.application.versions.list_versions import (
    get_version_content,
    get_version_stats,
    list_versions,
)
from pagebuilder.application.versions.revert_page import revert_page
from pagebuilder.domain.invariants.exceptions import ValidationFailed
from pagebuilder.normalizers.revert import normalize_revert
from pagebuilder.normalizers.version import normalize_version
from pagebuilder.repositories.base import get_page_repository
from pagebuilder.utils.decorators import valid_uuid_params
from pagebuilder.utils.optimistic_lock import enforce_optimistic_lock
from pagebuilder.utils.request_context import current_author_id, json_body
from . import v1_bp


# ------------------------
# Versions
# ------------------------

@v1_bp.route("/pages/<page_id>/versions", methods=["POST"])
@valid_uuid_params("page_id")
def create_version_route(page_id):
    data = json_body()

    version = create_version(
        repository=get_page_repository(),
        page_id=page_id,
        author_id=current_author_id(),
        version_name=data.get("versionName"),
        change_description=data.get("changeDescription"),
    )

    return jsonify({
        "version": normalize_version(version, include_components=True),
        "message": "Version created successfully"
    }), 201


@v1_bp.route("/pages/<page_id>/versions", methods=["GET"])
@valid_uuid_params("page_id")
def list_versions_route(page_id):
    versions = list_versions(repository=get_page_repository(), page_id=page_id)
    return jsonify({
        "versions": [normalize_version(v) for v in versions]
    }), 200


@v1_bp.route("/pages/<page_id>/versions/stats", methods=["GET"])
@valid_uuid_params("page_id")
def version_stats_route(page_id):
    stats = get_version_stats(repository=get_page_repository(), page_id=page_id)
    return jsonify({"stats": stats}), 200


@v1_bp.route("/pages/<page_id>/versions/<version_id>", methods=["GET"])
@valid_uuid_params("page_id", "version_id")
def get_version_route(page_id, version_id):
    version = get_version_content(
        repository=get_page_repository(),
        page_id=page_id,
        version_id=version_id,
    )
    return jsonify({
        "version": normalize_version(version, include_components=True)
    }), 200


@v1_bp.route("/pages/<page_id>/versions/<version_id>", methods=["DELETE"])
@valid_uuid_params("page_id", "version_id")
def delete_version_route(page_id, version_id):
    delete_version(
        repository=get_page_repository(),
        page_id=page_id,
        version_id=version_id,
        actor_id=current_author_id(),
    )
    return jsonify({"message": "Version deleted successfully"}), 200


# ------------------------
# Revert
# ------------------------

@v1_bp.route("/pages/<page_id>/revert/<version_id>", methods=["POST"])
@valid_uuid_params("page_id", "version_id")
def revert_page_route(page_id, version_id):
    data = json_body()
    create_backup = data.get("createBackup", True)
    if not isinstance(create_backup, bool):
        raise ValidationFailed(["createBackup must be a boolean"])

    result = revert_page(
        repository=get_page_repository(),
        page_id=page_id,
        version_id=version_id,
        create_backup=create_backup,
        author_id=current_author_id(),
        ignore_metadata_timestamps=current_app.config.get("REVERT_IGNORE_METADATA_TIMESTAMPS", True),
        precondition=enforce_optimistic_lock,
    )

    return jsonify({
        **normalize_revert(result),
        "message": f"Page reverted to version {result.reverted_to.version_number}"
    }), 200
