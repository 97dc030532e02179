#!/usr/bin/env python3
"""
WSGI entry point for production deployment
Run with e.g. `gunicorn wsgi:application`
"""

import os

# Must be set before app is imported, it builds an app at import time
os.environ.setdefault('FLASK_ENV', 'production')

from app import create_app  # noqa: E402

application = create_app(os.environ['FLASK_ENV'])

if __name__ == "__main__":
    application.run()
