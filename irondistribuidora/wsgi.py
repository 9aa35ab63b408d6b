"""
WSGI config do projeto Iron Distribuidora.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'irondistribuidora.settings')

application = get_wsgi_application()
