# Путь: backend/backend/wsgi.py
# Назначение: WSGI-точка входа (gunicorn backend.wsgi:application).

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings")

application = get_wsgi_application()
