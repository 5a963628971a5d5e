"""
ASGI config for the organizer project.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'organizer.config.settings')

application = get_asgi_application()
