# ayo_contact/logging_setup.py
import logging


def setup_logging(level=logging.INFO):
    """Configures logging to print to the console (the hosting platform collects stdout)."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )
