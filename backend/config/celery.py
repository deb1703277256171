import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("motionshift")

app.config_from_object("django.conf:settings", namespace="CELERY")

# picks up projects/tasks.py
app.autodiscover_tasks()
