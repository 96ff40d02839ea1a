import logging
from dataclasses import dataclass

from flask import Flask, jsonify, request, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from sitecms.api.routes import api_bp
from sitecms.config import Config, load_config
from sitecms.errors import NotFound, SiteContentError
from sitecms.services.auth_service import AuthGate
from sitecms.services.content_service import ContentStore
from sitecms.services.upload_service import UploadReceiver

logger = logging.getLogger(__name__)

# Room for multipart framing on top of the file itself; the exact file cap
# is enforced by UploadReceiver.
MULTIPART_OVERHEAD = 64 * 1024


@dataclass
class SiteServices:
    config: Config
    store: ContentStore
    auth: AuthGate
    uploads: UploadReceiver


def _cors_origins(value):
    origins = [o.strip() for o in value.split(",") if o.strip()]
    if not origins or "*" in origins:
        return "*"
    return origins


def create_app(config=None):
    config = config or load_config()
    config.ensure_dirs()

    if config.uses_default_admin_key:
        logger.warning("ADMIN_KEY is unset or the default placeholder; set it in .env before going live")

    app = Flask(__name__, static_folder=str(config.public_dir), static_url_path="")
    app.config["MAX_CONTENT_LENGTH"] = config.max_upload_bytes + MULTIPART_OVERHEAD

    uploads = UploadReceiver(config)
    app.extensions["sitecms"] = SiteServices(
        config=config,
        store=ContentStore(config, media=uploads),
        auth=AuthGate(config),
        uploads=uploads,
    )

    origins = _cors_origins(config.cors_origins)
    CORS(app, resources={r"/api/*": {"origins": origins}, r"/uploads/*": {"origins": origins}})

    app.register_blueprint(api_bp)

    @app.route("/uploads/<filename>")
    def uploaded_file(filename):
        return send_from_directory(config.uploads_dir, filename)

    @app.route("/")
    def index():
        if not (config.public_dir / "index.html").is_file():
            raise NotFound("Not found")
        return send_from_directory(config.public_dir, "index.html")

    @app.errorhandler(SiteContentError)
    def handle_site_error(e):
        return jsonify(error=e.message), e.status_code

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(e):
        return jsonify(error=f"File too large (max {config.max_upload_bytes} bytes)"), 413

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        if request.path.startswith("/api/"):
            return jsonify(error=e.description), e.code
        return e

    return app
