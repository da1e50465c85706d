from flask import jsonify

from pagebuilder.application.common import require_page
from pagebuilder.application.pages.add_component import add_component
from pagebuilder.application.pages.update_component import update_component
from pagebuilder.application.pages.remove_component import remove_component
from pagebuilder.application.pages.reorder_components import reorder_components
from pagebuilder.application.pages import accordion_items, links
from pagebuilder.normalizers.component import normalize_component, normalize_item
from pagebuilder.repositories.base import get_page_repository
from pagebuilder.utils.decorators import valid_uuid_params
from pagebuilder.utils.optimistic_lock import enforce_optimistic_lock
from pagebuilder.utils.request_context import current_author_id, json_body
from . import v1_bp


def _mutation_kwargs(page_id):
    return {
        "repository": get_page_repository(),
        "page_id": page_id,
        "actor_id": current_author_id(),
        "precondition": enforce_optimistic_lock,
    }


# ------------------------
# Components
# ------------------------

@v1_bp.route("/pages/<page_id>/components", methods=["GET"])
@valid_uuid_params("page_id")
def list_components(page_id):
    page = require_page(get_page_repository(), page_id)
    return jsonify({
        "components": [normalize_component(c) for c in page.get_ordered_components()]
    }), 200


@v1_bp.route("/pages/<page_id>/components/<component_id>", methods=["GET"])
@valid_uuid_params("page_id")
def get_component(page_id, component_id):
    page = require_page(get_page_repository(), page_id)
    return jsonify({
        "component": normalize_component(page.get_component_by_id(component_id))
    }), 200


@v1_bp.route("/pages/<page_id>/components", methods=["POST"])
@valid_uuid_params("page_id")
def add_component_route(page_id):
    data = json_body()

    component = add_component(
        component_type=data.get("type"),
        data=data.get("data"),
        order=data.get("order"),
        component_id=data.get("id"),
        **_mutation_kwargs(page_id),
    )

    return jsonify({
        "component": normalize_component(component),
        "message": "Component added successfully"
    }), 201


@v1_bp.route("/pages/<page_id>/components/<component_id>", methods=["PUT", "PATCH"])
@valid_uuid_params("page_id")
def update_component_route(page_id, component_id):
    component = update_component(
        component_id=component_id,
        changes=json_body(),
        **_mutation_kwargs(page_id),
    )

    return jsonify({
        "component": normalize_component(component),
        "message": "Component updated successfully"
    }), 200


@v1_bp.route("/pages/<page_id>/components/<component_id>", methods=["DELETE"])
@valid_uuid_params("page_id")
def remove_component_route(page_id, component_id):
    remove_component(component_id=component_id, **_mutation_kwargs(page_id))
    return jsonify({"message": "Component removed successfully"}), 200


@v1_bp.route("/pages/<page_id>/components/reorder", methods=["POST"])
@valid_uuid_params("page_id")
def reorder_components_route(page_id):
    data = json_body()

    ordered = reorder_components(
        component_ids=data.get("componentIds"),
        **_mutation_kwargs(page_id),
    )

    return jsonify({
        "components": [normalize_component(c) for c in ordered],
        "message": "Components reordered successfully"
    }), 200


# ------------------------
# Accordion items
# ------------------------

@v1_bp.route("/pages/<page_id>/components/<component_id>/items", methods=["POST"])
@valid_uuid_params("page_id")
def add_accordion_item(page_id, component_id):
    item = accordion_items.add_accordion_item(
        component_id=component_id,
        data=json_body(),
        **_mutation_kwargs(page_id),
    )
    return jsonify({"item": normalize_item(item)}), 201


@v1_bp.route("/pages/<page_id>/components/<component_id>/items/<item_id>", methods=["PUT", "PATCH"])
@valid_uuid_params("page_id")
def update_accordion_item(page_id, component_id, item_id):
    item = accordion_items.update_accordion_item(
        component_id=component_id,
        item_id=item_id,
        changes=json_body(),
        **_mutation_kwargs(page_id),
    )
    return jsonify({"item": normalize_item(item)}), 200


@v1_bp.route("/pages/<page_id>/components/<component_id>/items/<item_id>", methods=["DELETE"])
@valid_uuid_params("page_id")
def remove_accordion_item(page_id, component_id, item_id):
    accordion_items.remove_accordion_item(
        component_id=component_id,
        item_id=item_id,
        **_mutation_kwargs(page_id),
    )
    return jsonify({"message": "Item removed successfully"}), 200


@v1_bp.route("/pages/<page_id>/components/<component_id>/items/<item_id>/toggle", methods=["POST"])
@valid_uuid_params("page_id")
def toggle_accordion_item(page_id, component_id, item_id):
    is_open = accordion_items.toggle_accordion_item(
        component_id=component_id,
        item_id=item_id,
        **_mutation_kwargs(page_id),
    )
    return jsonify({"id": item_id, "isOpen": is_open}), 200


@v1_bp.route("/pages/<page_id>/components/<component_id>/items/reorder", methods=["POST"])
@valid_uuid_params("page_id")
def reorder_accordion_items(page_id, component_id):
    items = accordion_items.reorder_accordion_items(
        component_id=component_id,
        item_ids=json_body().get("itemIds"),
        **_mutation_kwargs(page_id),
    )
    return jsonify({"items": [normalize_item(i) for i in items]}), 200


# ------------------------
# Link group links
# ------------------------

@v1_bp.route("/pages/<page_id>/components/<component_id>/links", methods=["POST"])
@valid_uuid_params("page_id")
def add_link(page_id, component_id):
    link = links.add_link(
        component_id=component_id,
        data=json_body(),
        **_mutation_kwargs(page_id),
    )
    return jsonify({"link": normalize_item(link)}), 201


@v1_bp.route("/pages/<page_id>/components/<component_id>/links/<link_id>", methods=["PUT", "PATCH"])
@valid_uuid_params("page_id")
def update_link(page_id, component_id, link_id):
    link = links.update_link(
        component_id=component_id,
        link_id=link_id,
        changes=json_body(),
        **_mutation_kwargs(page_id),
    )
    return jsonify({"link": normalize_item(link)}), 200


@v1_bp.route("/pages/<page_id>/components/<component_id>/links/<link_id>", methods=["DELETE"])
@valid_uuid_params("page_id")
def remove_link(page_id, component_id, link_id):
    links.remove_link(
        component_id=component_id,
        link_id=link_id,
        **_mutation_kwargs(page_id),
    )
    return jsonify({"message": "Link removed successfully"}), 200


@v1_bp.route("/pages/<page_id>/components/<component_id>/links/reorder", methods=["POST"])
@valid_uuid_params("page_id")
def reorder_links(page_id, component_id):
    ordered = links.reorder_links(
        component_id=component_id,
        link_ids=json_body().get("linkIds"),
        **_mutation_kwargs(page_id),
    )
    return jsonify({"links": [normalize_item(link) for link in ordered]}), 200
