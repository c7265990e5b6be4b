"""
Authentication service implementation.

Registers users, checks passwords and issues/validates access tokens.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt
from pydantic import ValidationError as PayloadValidationError

from shared.clock import Clock, SystemClock
from shared.config import Settings, get_settings
from shared.exceptions import ConflictError
from shared.graph import GraphExecutor
from shared.models import AuthenticatedUser
from modules.catalog.entitlements import age_on
from modules.subscriptions.interfaces import ISubscriptionService
from modules.subscriptions.exceptions import UserNotFoundError

from .interfaces import IAuthService
from .models import (
    JWTPayload,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserProfile,
)
from .exceptions import (
    EmailAlreadyRegisteredError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    UnderageRegistrationError,
)
from .password import PasswordHasher
from .repository import UserRepository

logger = logging.getLogger(__name__)

TOKEN_AUDIENCE = "authenticated"


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Users live in the graph database; tokens are HS256 JWTs signed with
    the configured secret.
    """

    def __init__(
        self,
        graph: GraphExecutor,
        subscriptions: ISubscriptionService,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
        hasher: Optional[PasswordHasher] = None,
        repository: Optional[UserRepository] = None,
    ):
        self._graph = graph
        self._subscriptions = subscriptions
        self._settings = settings or get_settings()
        self._clock = clock or SystemClock()
        self._hasher = hasher or PasswordHasher()
        self._repository = repository or UserRepository(graph)

    async def register(self, request: RegisterRequest) -> UserProfile:
        """Create the user and the free trial subscription atomically."""
        now = self._clock.now()
        minimum_age = self._settings.minimum_registration_age
        if age_on(request.date_of_birth, now.date()) < minimum_age:
            raise UnderageRegistrationError(minimum_age)

        if self._repository.find_by_email(request.email) is not None:
            raise EmailAlreadyRegisteredError()

        password_hash = self._hasher.hash(request.password)

        try:
            with self._graph.transaction() as tx:
                record = self._repository.create(
                    email=request.email,
                    password_hash=password_hash,
                    date_of_birth=request.date_of_birth,
                    created_at=now,
                    first_name=request.first_name,
                    last_name=request.last_name,
                    tx=tx,
                )
                subscription = await self._subscriptions.create_subscription(
                    record.id,
                    self._settings.free_trial_plan_id,
                    override_days=self._settings.free_trial_days,
                    tx=tx,
                )
        except ConflictError as e:
            if e.field == "email":
                raise EmailAlreadyRegisteredError() from e
            raise

        logger.info(f"Registered user {record.id}")
        return UserProfile.from_record(record, subscription)

    async def authenticate(self, request: LoginRequest) -> UserProfile:
        """Check an email/password pair."""
        record = self._repository.find_by_email(request.email)

        if record is None or not self._hasher.verify(request.password, record.password_hash):
            raise InvalidCredentialsError()

        return UserProfile.from_record(record)

    def create_token(self, user: UserProfile) -> TokenResponse:
        """Issue an access token carrying the public profile fields."""
        now = self._clock.now()
        lifetime = timedelta(minutes=self._settings.jwt_expires_minutes)

        payload = {
            "sub": user.id,
            "email": user.email,
            "dateOfBirth": user.date_of_birth.isoformat() if user.date_of_birth else None,
            "firstName": user.first_name,
            "lastName": user.last_name,
            "aud": TOKEN_AUDIENCE,
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
        }
        token = jwt.encode(
            payload,
            self._settings.jwt_secret,
            algorithm=self._settings.jwt_algorithm,
        )
        return TokenResponse(access_token=token, expires_in=int(lifetime.total_seconds()))

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        Expiry is checked by the JWT library against the system time.
        """
        if not token:
            raise MissingTokenError()

        if not self._settings.jwt_secret:
            raise InvalidTokenError("Server authentication not configured")

        try:
            payload = jwt.decode(
                token,
                self._settings.jwt_secret,
                algorithms=[self._settings.jwt_algorithm],
                audience=TOKEN_AUDIENCE,
            )

            jwt_payload = JWTPayload(**payload)

            return AuthenticatedUser(
                id=jwt_payload.sub,
                email=jwt_payload.email,
                date_of_birth=jwt_payload.date_of_birth,
                first_name=jwt_payload.first_name,
                last_name=jwt_payload.last_name,
                last_sign_in=datetime.fromtimestamp(jwt_payload.iat, tz=timezone.utc),
            )

        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))
        except PayloadValidationError:
            raise InvalidTokenError("Malformed token claims")

    async def get_profile(self, user_id: str) -> UserProfile:
        """Get a user's profile with their current subscription."""
        record = self._repository.find_by_id(user_id)
        if record is None:
            raise UserNotFoundError()

        subscription = await self._subscriptions.get_current_subscription(user_id)
        return UserProfile.from_record(record, subscription)
