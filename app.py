# app.py
import logging
from ayo_contact.config import Settings
from ayo_contact.logging_setup import setup_logging
from ayo_contact.server import create_app

setup_logging()

settings = Settings.from_env()
app = create_app(settings)

# Production runs `gunicorn app:app`; this block is for local development.
if __name__ == '__main__':
    logging.info(f"Server running on port {settings.port}")
    app.run(host='0.0.0.0', port=settings.port, debug=not settings.is_production)
