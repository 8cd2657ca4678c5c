from django.apps import AppConfig


class TasksConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'tasks'

    task_repository = None

    def ready(self):
        # One repository per process, built once the model registry is loaded.
        from .repository import DjangoTaskRepository

        self.task_repository = DjangoTaskRepository()
