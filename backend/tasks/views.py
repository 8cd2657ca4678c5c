# tasks/views.py

import logging
import uuid
from rest_framework import filters, generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from .models import Task
from .prioritization import InputError, PrioritizationError, PriorityOrchestrator
from .serializers import PrioritizationRequestSerializer, TaskSerializer

logger = logging.getLogger(__name__)


class TaskListCreateView(generics.ListCreateAPIView):
    """
    GET: Paginated tasks, filtered by ?projectId=, ?status=, ?priority= and
    ?search= (title or description).
    POST: Create a new task.
    """
    serializer_class = TaskSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [filters.SearchFilter]
    search_fields = ['title', 'description']

    def get_queryset(self):
        queryset = Task.objects.select_related('project', 'assignee')
        project_id = self.request.query_params.get('projectId')
        if project_id:
            try:
                queryset = queryset.filter(project_id=uuid.UUID(project_id))
            except ValueError:
                return queryset.none()
        task_status = self.request.query_params.get('status')
        if task_status:
            queryset = queryset.filter(status=task_status)
        task_priority = self.request.query_params.get('priority')
        if task_priority:
            queryset = queryset.filter(priority=task_priority)
        return queryset

list_create_view = TaskListCreateView.as_view()


class TaskRetrieveUpdateDestroyView(generics.RetrieveUpdateDestroyAPIView):
    """
    GET, PUT, PATCH, DELETE for a specific task instance.
    """
    serializer_class = TaskSerializer
    permission_classes = [permissions.IsAuthenticated]
    queryset = Task.objects.select_related('project', 'assignee')

retreive_update_destroy_view = TaskRetrieveUpdateDestroyView.as_view()


class TaskPrioritizationView(APIView):
    """
    POST: analyze (default) or apply suggested priorities for a selection.
    GET: cached analysis for a selection, never recomputed.
    """
    permission_classes = [permissions.IsAuthenticated]

    def get_orchestrator(self):
        return PriorityOrchestrator()

    def post(self, request):
        serializer = PrioritizationRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        logger.info(
            f"Prioritization requested by user {request.user.pk} "
            f"(mode={serializer.validated_data['mode']})"
        )
        try:
            result = self.get_orchestrator().analyze_or_apply(
                serializer.get_selector(),
                serializer.validated_data['mode'],
            )
        except InputError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except PrioritizationError as e:
            logger.error(f"Prioritization failed: {e}")
            return Response(
                {"error": "Failed to analyze task priorities"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(result)

    def get(self, request):
        selector = {}
        project_id = request.query_params.get('projectId')
        if project_id:
            selector['projectId'] = project_id
        task_ids = request.query_params.get('taskIds')
        if task_ids:
            selector['taskIds'] = [t for t in task_ids.split(',') if t]

        try:
            result = self.get_orchestrator().get_cached_result(selector)
        except InputError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except PrioritizationError as e:
            logger.error(f"Cached prioritization lookup failed: {e}")
            return Response(
                {"error": "Failed to retrieve prioritization results"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(result)

prioritize_view = TaskPrioritizationView.as_view()
