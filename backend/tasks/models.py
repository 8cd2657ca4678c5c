import uuid

from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator
from django.utils.translation import gettext_lazy as _
from projects.models import Project


class Task(models.Model):
    """
    A unit of production work (shoot, edit, grade, ...) inside a project.
    """

    class Status(models.TextChoices):
        TODO = 'todo', _('To do')
        IN_PROGRESS = 'in_progress', _('In progress')
        REVIEW = 'review', _('Review')
        COMPLETED = 'completed', _('Completed')

    class Priority(models.TextChoices):
        LOW = 'low', _('Low')
        MEDIUM = 'medium', _('Medium')
        HIGH = 'high', _('High')

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='tasks',
        verbose_name=_("project")
    )

    assignee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='assigned_tasks',
        verbose_name=_("assignee")
    )

    title = models.CharField(max_length=255, verbose_name=_("title"))
    description = models.TextField(blank=True, verbose_name=_("description"))

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.TODO,
        db_index=True,
        verbose_name=_("status")
    )

    # The only field the prioritization engine ever writes.
    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM,
        verbose_name=_("priority")
    )

    start_date = models.DateTimeField(
        null=True, blank=True,
        db_index=True,
        verbose_name=_("start date")
    )
    due_date = models.DateTimeField(
        db_index=True,
        verbose_name=_("due date"),
        help_text=_("The deadline for the task.")
    )

    estimated_hours = models.FloatField(
        default=0,
        validators=[MinValueValidator(0)],
        verbose_name=_("estimated hours"),
        help_text=_("0 means no estimate was given.")
    )
    actual_hours = models.FloatField(
        default=0,
        validators=[MinValueValidator(0)],
        verbose_name=_("actual hours")
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created at"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("updated at"))

    class Meta:
        verbose_name = _("Task")
        verbose_name_plural = _("Tasks")
        # Insertion order; the prioritization ranking uses it as tie-break.
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.project.name}: {self.title}"
