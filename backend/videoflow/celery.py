import os
from dotenv import load_dotenv
load_dotenv()
from celery import Celery

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'videoflow.settings')

app = Celery('videoflow')

# - namespace='CELERY' means all celery-related configuration keys
#   should have a `CELERY_` prefix.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django apps, plus the engine package
# which does not follow the tasks.py naming convention.
app.autodiscover_tasks()
app.autodiscover_tasks(['tasks.prioritization'], related_name='celery_tasks')
