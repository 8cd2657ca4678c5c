from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

User = get_user_model()


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact representation used when a user is embedded in a task."""
    name = serializers.ReadOnlyField(source='display_name')

    class Meta:
        model = User
        fields = ('id', 'name', 'role')
        read_only_fields = fields


class UserDetailsSerializer(serializers.ModelSerializer):
    """
    Serializer for returning authenticated user details
    """
    class Meta:
        model = User
        fields = (
            'id',
            'email',
            'username',
            'first_name',
            'last_name',
            'role',
        )
        read_only_fields = fields


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Customizes the TokenObtainPairSerializer to use 'email'
    instead of 'username' for the authentication field.
    """
    username_field = 'email'

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        # Custom claims (accessible in the frontend)
        token['email'] = user.email
        token['role'] = user.role
        return token


class UserRegistrationSerializer(serializers.ModelSerializer):
    """
    Sign-up for crew members and project managers. Admin accounts are
    created with ``createsuperuser`` only.
    """
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password]
    )

    password2 = serializers.CharField(write_only=True, required=True)

    role = serializers.ChoiceField(
        choices=[
            (User.Role.CREW_MEMBER, User.Role.CREW_MEMBER.label),
            (User.Role.PROJECT_MANAGER, User.Role.PROJECT_MANAGER.label),
        ],
        default=User.Role.CREW_MEMBER,
    )

    class Meta:
        model = User
        fields = (
            'id',
            'email',
            'username',
            'password',
            'password2',
            'first_name',
            'last_name',
            'role',
        )
        read_only_fields = ('id',)
        extra_kwargs = {
            'email': {'required': True},
            'first_name': {'required': True},
            'last_name': {'required': True},
        }

    def validate(self, attrs):
        if attrs['password'] != attrs['password2']:
            raise serializers.ValidationError({"password": "Password fields didn't match."})
        return attrs

    def create(self, validated_data):
        validated_data.pop('password2')
        return User.objects.create_user(
            email=validated_data['email'],
            password=validated_data['password'],
            username=validated_data.get('username') or None,
            first_name=validated_data.get('first_name', ''),
            last_name=validated_data.get('last_name', ''),
            role=validated_data['role'],
        )


class UserListSerializer(serializers.ModelSerializer):
    """Row of the admin user directory."""
    name = serializers.ReadOnlyField(source='display_name')

    class Meta:
        model = User
        fields = ('id', 'email', 'name', 'role', 'date_joined')
        read_only_fields = fields
