# core/authentication.py
# DRF authentication class that verifies identity provider JWTs

import logging
import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

logger = logging.getLogger("collab.auth")

User = get_user_model()


class IdentityTokenAuthentication(BaseAuthentication):
    """
    Resolves the caller from a JWT issued by the external identity provider.

    This authenticator:
    1. Extracts the JWT from the Authorization header
    2. Verifies the token signature with IDENTITY_JWT_SECRET
    3. Maps the subject claim to a local user, creating it on first sight

    Profile fields (name, avatar) are copied from the claims on every request;
    the identity provider is their only writer.
    """
    keyword = "Bearer"

    def authenticate(self, request):
        auth_header = request.headers.get("Authorization", "")

        if not auth_header.startswith(f"{self.keyword} "):
            return None  # Let other auth backends handle it

        token = auth_header.split(" ", 1)[1].strip()
        secret = settings.IDENTITY_JWT_SECRET

        if not secret:
            logger.warning("IDENTITY_JWT_SECRET not configured")
            return None

        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=["HS256"],
                audience=settings.IDENTITY_JWT_AUDIENCE,
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationFailed("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.debug("Invalid identity token: %s", e)
            return None  # Let other auth backends try

        subject = payload.get("sub")
        if not subject:
            raise AuthenticationFailed("Invalid token: missing subject")

        user = self._resolve_user(subject, payload)
        if not user.is_active:
            raise AuthenticationFailed("User is inactive")

        return (user, payload)

    def authenticate_header(self, request):
        return f'{self.keyword} realm="api"'

    def _resolve_user(self, subject: str, payload: dict):
        email = payload.get("email") or ""
        name = payload.get("name") or ""
        avatar = payload.get("picture")

        user = User.objects.filter(external_id=subject).first()
        if user is None and email:
            # Accounts created before the identity provider knew them
            user = User.objects.filter(email=email, external_id__isnull=True).first()

        if user is None:
            user = User.objects.create(
                username=self._unique_username(email or subject),
                email=email,
                name=name,
                avatar=avatar,
                external_id=subject,
            )
            user.set_unusable_password()
            user.save(update_fields=["password"])
            logger.info("Created user %s from identity token", user.pk)
            return user

        changed = []
        for field, value in (("external_id", subject), ("email", email), ("name", name), ("avatar", avatar)):
            if value and getattr(user, field) != value:
                setattr(user, field, value)
                changed.append(field)
        if changed:
            user.save(update_fields=changed)

        return user

    @staticmethod
    def _unique_username(seed: str) -> str:
        base_username = seed.split("@")[0][:140] or "user"
        username = base_username
        counter = 1
        while User.objects.filter(username=username).exists():
            username = f"{base_username}_{counter}"
            counter += 1
        return username
