import logging
from functools import wraps

from flask import Blueprint, current_app, jsonify, request

from sitecms.errors import BadRequest, Unauthorized
from sitecms.utils.helpers import sanitize

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__, url_prefix="/api")


def _services():
    return current_app.extensions["sitecms"]


def _admin_key_from_request():
    key = (
        request.headers.get("x-admin-key")
        or request.args.get("adminKey")
        or request.form.get("adminKey")
    )
    if not key:
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            key = body.get("adminKey")
    return key


def require_admin_key(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not _services().auth.authorize(_admin_key_from_request()):
            logger.warning("Rejected admin request %s %s from %s", request.method, request.path, request.remote_addr)
            raise Unauthorized()
        return view(*args, **kwargs)
    return wrapper


def _parse_position(raw):
    if raw is None or not raw.strip():
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        raise BadRequest("position must be an integer")


# --- Content ---

@api_bp.route("/content")
def get_content():
    return jsonify(_services().store.load())


@api_bp.route("/content/<section>")
def get_section(section):
    return jsonify(_services().store.get_section(section))


@api_bp.route("/content/<section>", methods=["PUT"])
@require_admin_key
def replace_section(section):
    body = request.get_json(silent=True)
    if body is None:
        raise BadRequest("Request body must be JSON")
    # The admin key may travel in the body; it is not content.
    if isinstance(body, dict):
        body = {k: v for k, v in body.items() if k != "adminKey"}
    value = _services().store.replace_section(section, body)
    return jsonify(status="ok", section=value)


# --- Photos ---

@api_bp.route("/photos")
def list_photos():
    return jsonify(_services().store.list_photos())


@api_bp.route("/photos", methods=["POST"])
@require_admin_key
def upload_photo():
    file = request.files.get("photo")
    if file is None or not file.filename:
        raise BadRequest("No file uploaded")

    label = sanitize(request.form.get("label")) or "Photo"
    position = _parse_position(request.form.get("position"))

    services = _services()
    stored = services.uploads.receive(file.stream, file.filename)
    try:
        photo = services.store.add_photo(stored["storage_id"], stored["url"], label, position)
    except Exception:
        services.uploads.discard(stored["storage_id"])
        raise
    return jsonify(status="ok", photo=photo)


@api_bp.route("/photos/<photo_id>", methods=["DELETE"])
@require_admin_key
def delete_photo(photo_id):
    _services().store.remove_photo(photo_id)
    return jsonify(status="ok")


# --- Health ---

@api_bp.route("/health")
def health():
    return jsonify(status="ok")
