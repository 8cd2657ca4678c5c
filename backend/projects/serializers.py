# projects/serializers.py

from rest_framework import serializers
from .models import Project


class ProjectSerializer(serializers.ModelSerializer):
    project_manager_email = serializers.ReadOnlyField(source='project_manager.email')

    class Meta:
        model = Project
        fields = (
            'id', 'name', 'description', 'project_manager', 'project_manager_email',
            'status', 'budget', 'start_date', 'end_date', 'progress',
            'created_at', 'updated_at'
        )
        read_only_fields = ('id', 'created_at', 'updated_at')

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({"end_date": "The end date must not be before the start date."})
        return attrs
