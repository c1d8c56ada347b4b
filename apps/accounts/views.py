from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema
from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    ProfileUpdateSerializer,
    PushTokenSerializer,
    DeleteAccountSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    update_user_profile,
    update_push_token,
    delete_user_account,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    PasswordConfirmationError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    token = serializers.CharField()
    tokens = TokensResponseSerializer()


class ProfileResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def _auth_response(user, message, status_code=status.HTTP_200_OK):
    """Build the login/register payload with a fresh token pair."""
    refresh = RefreshToken.for_user(user)
    access = str(refresh.access_token)

    return Response({
        'message': message,
        'user': UserSerializer(user).data,
        'token': access,
        'tokens': {
            'refresh': str(refresh),
            'access': access,
        }
    }, status=status_code)


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: AuthResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Register a new user account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = register_user(**serializer.validated_data)
    except UserRegistrationError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )

    return _auth_response(user, 'Registration successful', status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password']
        )
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return _auth_response(user, 'Login successful')


@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@extend_schema(
    methods=['PUT'],
    request=ProfileUpdateSerializer,
    responses={
        200: ProfileResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Update the current user's name and/or password.",
    tags=['auth'],
)
@extend_schema(
    methods=['DELETE'],
    request=DeleteAccountSerializer,
    responses={
        204: None,
        400: ErrorResponseSerializer,
    },
    description="Delete the account with its parties, participations and items.",
    tags=['auth'],
)
@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def current_user(request):
    """Get, update or delete the authenticated user's account."""
    if request.method == 'PUT':
        return _update_profile(request)
    if request.method == 'DELETE':
        return _delete_account(request)
    return Response(UserSerializer(request.user).data)


def _update_profile(request):
    serializer = ProfileUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = update_user_profile(user_id=request.user.id, **serializer.validated_data)
    except PasswordConfirmationError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Profile updated successfully',
        'user': UserSerializer(user).data,
    })


def _delete_account(request):
    serializer = DeleteAccountSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        delete_user_account(
            user_id=request.user.id,
            password=serializer.validated_data['password']
        )
    except PasswordConfirmationError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    request=PushTokenSerializer,
    responses={200: MessageResponseSerializer},
    description="Register the device token used for push notifications.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def update_push_token_view(request):
    """Store the caller's push notification token."""
    serializer = PushTokenSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    update_push_token(user_id=request.user.id, token=serializer.validated_data['token'])

    return Response({'message': 'Push token updated'})
