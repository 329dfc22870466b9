from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken
from django.conf import settings
from django.contrib.auth import get_user_model

User = get_user_model()


class CookieJWTAuthentication(JWTAuthentication):
    """
    Bearer JWT authentication with an HttpOnly cookie fallback.

    The Authorization header wins when present; otherwise the access token is
    read from the cookie named by SIMPLE_JWT["AUTH_COOKIE"].
    """

    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            return super().authenticate(request)

        access_token = request.COOKIES.get(settings.SIMPLE_JWT.get("AUTH_COOKIE", "access_token"))
        if not access_token:
            return None

        validated_token = self.get_validated_token(access_token)
        return self.get_user(validated_token), validated_token

    def get_user(self, validated_token):
        """
        Load the user with its business eagerly, since every scoped request
        reads ``user.business_id`` right after authentication.
        """
        try:
            user_id = validated_token[settings.SIMPLE_JWT.get('USER_ID_CLAIM', 'user_id')]
        except KeyError:
            raise InvalidToken('Token contained no recognizable user identification')

        try:
            user = User.objects.select_related('business').get(
                **{settings.SIMPLE_JWT.get('USER_ID_FIELD', 'id'): user_id}
            )
        except User.DoesNotExist:
            raise AuthenticationFailed('User not found', code='user_not_found')

        if not user.is_active:
            raise AuthenticationFailed('User is inactive', code='user_inactive')

        return user
