"""
Views for the Users app.

All auth responses use camelCase and a flat token structure.
"""
import logging

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from apps.users.serializers import (
    UserRegistrationSerializer,
    UserSerializer,
    UserUpdateSerializer,
)

logger = logging.getLogger(__name__)
User = get_user_model()


def _build_auth_response(user, refresh_token, http_status=status.HTTP_200_OK):
    """Helper to build a consistent auth response with camelCase tokens."""
    return Response(
        {
            'success': True,
            'user': UserSerializer(user).data,
            'accessToken': str(refresh_token.access_token),
            'refreshToken': str(refresh_token),
        },
        status=http_status,
    )


def _auth_failed():
    return Response(
        {
            'success': False,
            'error': {
                'code': 'authentication_failed',
                'message': 'Invalid email or password.',
            },
        },
        status=status.HTTP_401_UNAUTHORIZED,
    )


class RegisterView(APIView):
    """
    Register a new user account.

    POST /api/v1/auth/register/
    Body: {"firstName": "...", "lastName": "...", "email": "...", "password": "..."}
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info('New user registered: %s (id=%s)', user.email, user.id)

        refresh = RefreshToken.for_user(user)
        return _build_auth_response(user, refresh, status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    Login with email and password to obtain JWT tokens.

    POST /api/v1/auth/login/
    Body: {"email": "...", "password": "..."}
    """
    permission_classes = [AllowAny]

    def post(self, request):
        email = request.data.get('email')
        password = request.data.get('password')

        if not email or not password:
            return Response(
                {
                    'success': False,
                    'error': {
                        'code': 'validation_error',
                        'message': 'Both email and password are required.',
                    },
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            user = User.objects.get(email=email.lower())
        except User.DoesNotExist:
            return _auth_failed()

        if not user.check_password(password):
            return _auth_failed()

        if not user.is_active:
            return Response(
                {
                    'success': False,
                    'error': {
                        'code': 'account_disabled',
                        'message': 'This account has been disabled.',
                    },
                },
                status=status.HTTP_403_FORBIDDEN,
            )

        refresh = RefreshToken.for_user(user)
        return _build_auth_response(user, refresh, status.HTTP_200_OK)


class UserProfileView(APIView):
    """
    Retrieve or update the authenticated user's profile.

    GET   /api/v1/users/me/
    PATCH /api/v1/users/me/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        serializer = UserSerializer(request.user)
        return Response({'success': True, 'data': serializer.data})

    def patch(self, request):
        serializer = UserUpdateSerializer(
            request.user,
            data=request.data,
            partial=True,
        )
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(
            {
                'success': True,
                'data': UserSerializer(request.user).data,
            }
        )
