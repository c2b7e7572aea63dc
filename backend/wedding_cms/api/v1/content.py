# wedding_cms/api/v1/content.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from wedding_cms.utils.decorators import roles_required
from wedding_cms.application.content.store import ContentStore
from wedding_cms.application.session import AdminSession
from wedding_cms.normalizers.content import normalize_content_item
from . import v1_bp


# ------------------------
# Public reads
# ------------------------

@v1_bp.route("/content", methods=["GET"])
def list_content():
    items = ContentStore().get_all()
    return jsonify([normalize_content_item(item) for item in items])


@v1_bp.route("/content/<key>", methods=["GET"])
def get_content(key):
    item = ContentStore().get_by_key(key)
    return jsonify(normalize_content_item(item))


# ------------------------
# Admin writes
# ------------------------

@v1_bp.route("/content", methods=["POST"])
@jwt_required()
@roles_required("admin")
def create_content():
    data = request.get_json(silent=True) or {}

    if not data.get("key") or "value" not in data:
        return jsonify({"error": "Key and value are required"}), 400

    store = ContentStore(AdminSession.from_jwt())
    item = store.create(data["key"], data["value"])

    return jsonify(normalize_content_item(item, admin=True)), 201


@v1_bp.route("/content/<key>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
def upsert_content(key):
    data = request.get_json(silent=True) or {}

    if "value" not in data:
        return jsonify({"error": "Value is required"}), 400

    store = ContentStore(AdminSession.from_jwt())
    item = store.upsert(key, data["value"])

    return jsonify(normalize_content_item(item, admin=True)), 200


@v1_bp.route("/content/<key>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_content(key):
    removed = ContentStore(AdminSession.from_jwt()).delete(key)

    return jsonify({
        "key": key,
        "deleted": removed
    }), 200
