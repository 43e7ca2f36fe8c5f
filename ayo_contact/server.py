# ayo_contact/server.py
import os
import logging
from datetime import datetime, timezone

from flask import Flask, request, jsonify, redirect, send_from_directory
from flask_cors import CORS
from werkzeug.security import safe_join

from ayo_contact.config import Settings, describe_environment, log_environment
from ayo_contact.contact import ContactHandler, Submission
from ayo_contact.email_sender import build_mail_sender

logger = logging.getLogger(__name__)

# Paths reachable over plain HTTP even in production (load balancer probes)
HTTPS_EXEMPT_PATHS = {"/health"}


def create_app(settings=None, mail_sender=None):
    """
    Builds the Flask app. Settings and the mail sender are read/built once here
    and shared by every request; pass them in to run against fakes.
    """
    if settings is None:
        settings = Settings.from_env()
    if mail_sender is None:
        mail_sender = build_mail_sender(settings)

    app = Flask(__name__, static_folder=None)
    app.config["SETTINGS"] = settings
    handler = ContactHandler(settings, mail_sender)

    CORS(app, resources={r"/send-email": {"origins": list(settings.allowed_origins)}},
         supports_credentials=True)

    log_environment(settings)
    if not mail_sender.is_configured():
        logger.warning(f"Mail provider '{mail_sender.provider}' is not configured; /send-email will fail")

    @app.before_request
    def enforce_https():
        if not settings.is_production or request.path in HTTPS_EXEMPT_PATHS:
            return None
        proto = request.headers.get("X-Forwarded-Proto", "").split(",")[0].strip().lower()
        if proto == "http":
            return redirect(request.url.replace("http://", "https://", 1), code=301)
        return None

    @app.route('/send-email', methods=['POST'])
    def send_email():
        """Accepts the contact form (JSON or URL-encoded) and sends both emails."""
        data = request.get_json(silent=True)
        if data is None:
            data = request.form.to_dict()
        if not isinstance(data, dict):
            data = {}

        result = handler.handle_submission(Submission.from_form(data))
        return jsonify(result.to_dict()), result.status_code

    @app.route('/health')
    def health():
        timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return jsonify({
            "status": "OK",
            "timestamp": timestamp,
            "environment": settings.environment,
            "provider": mail_sender.provider,
            "email_configured": mail_sender.is_configured(),
            "env_vars": describe_environment(),
        }), 200

    @app.route('/', defaults={'path': ''})
    @app.route('/<path:path>')
    def static_files(path):
        public_dir = settings.public_dir
        if path:
            target = safe_join(public_dir, path)
            if target and os.path.isfile(target):
                return send_from_directory(public_dir, path)
        return send_from_directory(public_dir, 'index.html')

    return app
