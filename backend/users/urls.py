from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from .serializers import CustomTokenObtainPairSerializer
from .views import register_api_view, user_detail_view, user_list_view


urlpatterns = [
    # Open sign-up for crew members and project managers
    path('register/', register_api_view, name='auth_register'),

    # Simple JWT login endpoint, customized to use the email field
    path(
        'login/',
        TokenObtainPairView.as_view(serializer_class=CustomTokenObtainPairSerializer),
        name='token_obtain_pair'
    ),
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('user/', user_detail_view, name='user_detail'),

    # Admin-only directory
    path('users/', user_list_view, name='user_list'),
]
