#!/usr/bin/env python
# Путь: backend/manage.py
# Назначение: Точка входа для команд Django (runserver, migrate, fix_slugs, scan_slugs ...).

import os
import sys


def main():
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings")
    from django.core.management import execute_from_command_line

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
