# tasks/serializers.py

from rest_framework import serializers
from users.serializers import UserSummarySerializer
from .models import Task
from .prioritization.records import MODES, MODE_ANALYZE


class TaskSerializer(serializers.ModelSerializer):
    assignee_detail = UserSummarySerializer(source='assignee', read_only=True)
    project_name = serializers.ReadOnlyField(source='project.name')

    class Meta:
        model = Task
        fields = [
            'id', 'project', 'project_name', 'assignee', 'assignee_detail',
            'title', 'description', 'status', 'priority',
            'start_date', 'due_date', 'estimated_hours', 'actual_hours',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        due = attrs.get('due_date', getattr(self.instance, 'due_date', None))
        if start and due and due < start:
            raise serializers.ValidationError({"due_date": "The due date must not be before the start date."})
        return attrs


class PrioritizationRequestSerializer(serializers.Serializer):
    """
    Body of POST /tasks/prioritize/. Identifier format is checked by the engine.
    """
    projectId = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    taskIds = serializers.ListField(
        child=serializers.CharField(),
        required=False,
        allow_null=True,
    )
    mode = serializers.ChoiceField(choices=MODES, default=MODE_ANALYZE)

    def get_selector(self):
        data = self.validated_data
        selector = {}
        if data.get('projectId'):
            selector['projectId'] = data['projectId']
        if data.get('taskIds'):
            selector['taskIds'] = data['taskIds']
        return selector
