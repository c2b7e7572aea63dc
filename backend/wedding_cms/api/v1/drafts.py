# wedding_cms/api/v1/drafts.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from wedding_cms.utils.decorators import roles_required
from wedding_cms.utils.optimistic_lock import expected_version_from_request
from wedding_cms.application.drafts.manager import DraftManager
from wedding_cms.application.session import AdminSession
from wedding_cms.domain.pages import EDITABLE_PAGES, assert_known_page
from wedding_cms.normalizers.page_config import normalize_page_config
from wedding_cms.normalizers.page_draft import normalize_page_draft
from . import v1_bp


def _manager():
    return DraftManager(AdminSession.from_jwt())


@v1_bp.route("/pages", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_pages():
    return jsonify([normalize_page_config(page) for page in EDITABLE_PAGES])


# ------------------------
# Draft history
# ------------------------

@v1_bp.route("/drafts", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_all_drafts():
    drafts = _manager().list_all_drafts()
    return jsonify([normalize_page_draft(d, include_content=False) for d in drafts])


@v1_bp.route("/pages/<page_key>/drafts", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_drafts(page_key):
    assert_known_page(page_key)
    drafts = _manager().list_drafts(page_key)
    return jsonify([normalize_page_draft(d) for d in drafts])


@v1_bp.route("/pages/<page_key>/drafts/latest", methods=["GET"])
@jwt_required()
@roles_required("admin")
def get_latest_draft(page_key):
    assert_known_page(page_key)
    draft = _manager().get_latest_draft(page_key)
    return jsonify(normalize_page_draft(draft) if draft else None)


@v1_bp.route("/pages/<page_key>/drafts/published", methods=["GET"])
@jwt_required()
@roles_required("admin")
def get_published_draft(page_key):
    assert_known_page(page_key)
    draft = _manager().get_published_draft(page_key)
    return jsonify(normalize_page_draft(draft) if draft else None)


# ------------------------
# Save / publish / restore
# ------------------------

@v1_bp.route("/pages/<page_key>/drafts", methods=["POST"])
@jwt_required()
@roles_required("admin")
def create_draft(page_key):
    data = request.get_json(silent=True) or {}

    content = data.get("content")
    if not isinstance(content, dict):
        return jsonify({"error": "Content must be an object"}), 400

    draft = _manager().create_draft(
        page_key,
        content,
        notes=data.get("notes"),
        expected_version=expected_version_from_request(data),
    )

    return jsonify({
        "message": f"Version {draft.version} created",
        "draft": normalize_page_draft(draft),
    }), 201


@v1_bp.route("/pages/<page_key>/drafts/<draft_id>/publish", methods=["POST"])
@jwt_required()
@roles_required("admin")
def publish_draft(page_key, draft_id):
    draft = _manager().publish_draft(draft_id, page_key)

    return jsonify({
        "message": f"Version {draft.version} published",
        "draft": normalize_page_draft(draft),
    }), 200


@v1_bp.route("/pages/<page_key>/drafts/<draft_id>/restore", methods=["POST"])
@jwt_required()
@roles_required("admin")
def restore_draft(page_key, draft_id):
    draft = _manager().restore_version(draft_id, page_key)

    return jsonify({
        "message": f"Restored as version {draft.version}",
        "draft": normalize_page_draft(draft),
    }), 201
