import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer, TokenRefreshSerializer
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.tokens import RefreshToken
from django.contrib.auth import get_user_model
from .context import get_request_context
from .serializers import UserSerializer, UserCreateSerializer, UserSettingsSerializer
from .services import get_settings_values, upsert_user_settings

logger = logging.getLogger('organizer.core')

User = get_user_model()


def issue_tokens(user):
    """Access/refresh pair for ``user`` carrying the organizer claims"""
    refresh = LoginSerializer.get_token(user)
    return {'access': str(refresh.access_token), 'refresh': str(refresh)}


class LoginSerializer(TokenObtainPairSerializer):
    """Username/password login; the token carries the username for display"""

    def validate(self, attrs):
        data = super().validate(attrs)
        logger.info(f"User {self.user.pk} signed in")
        return data

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['username'] = user.username
        return token


class LoginView(TokenObtainPairView):
    serializer_class = LoginSerializer


class RefreshSerializer(TokenRefreshSerializer):
    """Refresh that answers 401 for tokens of removed users"""

    def validate(self, attrs):
        try:
            refresh = RefreshToken(attrs['refresh'])
        except TokenError as e:
            raise InvalidToken(str(e))
        if not User.objects.filter(pk=refresh.get(jwt_settings.USER_ID_CLAIM), is_active=True).exists():
            raise InvalidToken('Token owner no longer exists.')
        return super().validate(attrs)


class RefreshView(TokenRefreshView):
    serializer_class = RefreshSerializer


@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Create an account and sign it in"""
    serializer = UserCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    logger.info(f"Registered user {user.pk} ({user.username})")
    return Response({'user': UserSerializer(user).data, **issue_tokens(user)}, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_me(request):
    """Return the authenticated user"""
    return Response(UserSerializer(request.user).data)


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def user_settings(request):
    """Read the caller's settings (defaults when never saved) or upsert them"""
    ctx = get_request_context(request)

    if request.method == 'GET':
        return Response(get_settings_values(ctx))

    serializer = UserSettingsSerializer(data=request.data, partial=True)
    if not serializer.is_valid():
        logger.warning(f"Settings validation failed for user {ctx.user_id}: {serializer.errors}")
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    upsert_user_settings(ctx, serializer.validated_data)
    return Response(get_settings_values(ctx))
