"""
WSGI config for the triplanner project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "triplanner.settings")

application = get_wsgi_application()
