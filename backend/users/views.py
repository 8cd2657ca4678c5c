from rest_framework import filters, generics, permissions
from .models import CustomUser
from .serializers import (
    UserDetailsSerializer,
    UserListSerializer,
    UserRegistrationSerializer,
)


class IsAdminRole(permissions.BasePermission):
    """
    Only users with the admin role may browse the user directory.
    """
    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.role == CustomUser.Role.ADMIN)


class RegisterAPIView(generics.CreateAPIView):
    serializer_class = UserRegistrationSerializer
    permission_classes = [permissions.AllowAny]

register_api_view = RegisterAPIView.as_view()


class UserDetailView(generics.RetrieveAPIView):
    """
    GET: details of the authenticated user.
    """
    serializer_class = UserDetailsSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user

user_detail_view = UserDetailView.as_view()


class UserListView(generics.ListAPIView):
    """
    GET: paginated user list for admins, filtered by ?role= and ?search=.
    """
    serializer_class = UserListSerializer
    permission_classes = [IsAdminRole]
    filter_backends = [filters.SearchFilter]
    search_fields = ['email', 'username', 'first_name', 'last_name']

    def get_queryset(self):
        queryset = CustomUser.objects.order_by('-date_joined', 'id')
        role = self.request.query_params.get('role')
        if role:
            queryset = queryset.filter(role=role)
        return queryset

user_list_view = UserListView.as_view()
