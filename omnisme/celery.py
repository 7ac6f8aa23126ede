"""
Celery configuration for background tasks.

Used for license expiry and decision e-mails.
"""
import os

from celery import Celery
from celery.schedules import crontab

# Set default Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "omnisme.settings.dev")

app = Celery("omnisme")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()

app.conf.beat_schedule = {
    "expire-licenses-daily": {
        "task": "core.tasks.expire_licenses",
        "schedule": crontab(hour=2, minute=0),
    },
}
