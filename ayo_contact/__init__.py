# ayo_contact/__init__.py
"""Contact form backend for ayocreativedesigns.com."""
