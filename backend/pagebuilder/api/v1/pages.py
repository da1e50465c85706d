from flask import jsonify

from pagebuilder.application.common import require_page
from pagebuilder.application.pages.create_page import create_page
from pagebuilder.application.pages.delete_page import delete_page
from pagebuilder.application.pages.initialize_from_template import initialize_from_template
from pagebuilder.normalizers.page import normalize_page
from pagebuilder.repositories.base import get_page_repository
from pagebuilder.utils.decorators import valid_uuid_params
from pagebuilder.utils.optimistic_lock import enforce_optimistic_lock
from pagebuilder.utils.request_context import current_author_id, json_body
from . import v1_bp


# ------------------------
# Pages
# ------------------------

@v1_bp.route("/pages", methods=["POST"])
def create_page_route():
    data = json_body()

    page = create_page(
        repository=get_page_repository(),
        template_id=data.get("templateId"),
        template=data.get("template"),
        actor_id=current_author_id(),
    )

    return jsonify({
        "page": normalize_page(page),
        "message": "Page created successfully"
    }), 201


@v1_bp.route("/pages", methods=["GET"])
def list_pages():
    pages = get_page_repository().list_pages()
    return jsonify({
        "pages": [normalize_page(p, include_components=False) for p in pages]
    }), 200


@v1_bp.route("/pages/<page_id>", methods=["GET"])
@valid_uuid_params("page_id")
def get_page(page_id):
    page = require_page(get_page_repository(), page_id)
    return jsonify({"page": normalize_page(page)}), 200


@v1_bp.route("/pages/<page_id>", methods=["DELETE"])
@valid_uuid_params("page_id")
def delete_page_route(page_id):
    delete_page(
        repository=get_page_repository(),
        page_id=page_id,
        actor_id=current_author_id(),
    )
    return jsonify({"message": "Page deleted successfully"}), 200


@v1_bp.route("/pages/<page_id>/stats", methods=["GET"])
@valid_uuid_params("page_id")
def page_stats(page_id):
    page = require_page(get_page_repository(), page_id)
    return jsonify({"stats": page.component_stats()}), 200


@v1_bp.route("/pages/<page_id>/initialize", methods=["POST"])
@valid_uuid_params("page_id")
def initialize_page(page_id):
    data = json_body()

    page = initialize_from_template(
        repository=get_page_repository(),
        page_id=page_id,
        template=data.get("template", data),
        actor_id=current_author_id(),
        precondition=enforce_optimistic_lock,
    )

    return jsonify({
        "page": normalize_page(page),
        "message": "Page initialized from template"
    }), 200
