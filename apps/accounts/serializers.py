from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'name',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    email = serializers.EmailField(required=True, max_length=255)
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    name = serializers.CharField(required=True, min_length=2, max_length=255)

    def validate_email(self, value):
        """Normalize and reject emails that are already registered."""
        email = User.objects.normalize_email(value)
        if User.objects.filter(email=email).exists():
            raise serializers.ValidationError('This email is already in use')
        return email


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class ProfileUpdateSerializer(serializers.Serializer):
    """Serializer for profile updates (name and/or password)."""

    name = serializers.CharField(required=False, min_length=2, max_length=255)
    current_password = serializers.CharField(
        required=False,
        write_only=True,
        style={'input_type': 'password'}
    )
    new_password = serializers.CharField(
        required=False,
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        if attrs.get('new_password') and not attrs.get('current_password'):
            raise serializers.ValidationError({
                'current_password': 'Current password is required to set a new password'
            })
        return attrs


class PushTokenSerializer(serializers.Serializer):
    """Serializer for registering a push notification device token."""

    token = serializers.CharField(required=True)


class DeleteAccountSerializer(serializers.Serializer):
    """Serializer for account deletion confirmation."""

    password = serializers.CharField(
        required=True,
        write_only=True,
        help_text="Current password for confirmation"
    )


class UserPublicSerializer(serializers.ModelSerializer):
    """Public user info (for displaying in participant lists)."""

    class Meta:
        model = User
        fields = ['id', 'name', 'email']
        read_only_fields = fields
