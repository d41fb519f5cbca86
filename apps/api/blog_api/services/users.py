"""User service layer."""

import logging

from starlette.concurrency import run_in_threadpool

from blog_api.adapters.auth import Credentials
from blog_api.core.logging_safety import safe_log_email, safe_log_identifier
from blog_api.errors import BadRequestError, UnauthorizedError
from blog_api.repositories import Store, UserRecord
from blog_api.schemas.auth import TokenData
from blog_api.schemas.user import CreateUserRequest, User

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, store: Store, credentials: Credentials) -> None:
        self._users = store.users
        self._credentials = credentials

    async def register(self, payload: CreateUserRequest) -> User:
        email = payload.email.strip()
        if self._users.find_one({"email": email}) is not None:
            raise BadRequestError("USER_ALREADY_EXISTS", "A user with this email already exists")

        # Off the event loop; pbkdf2 blocks the calling thread.
        password_hash = await run_in_threadpool(self._credentials.hash_password, payload.password)
        record = self._users.create(email=email, password_hash=password_hash, type=payload.type)
        logger.info(
            "users.created user_id=%s email=%s type=%s",
            safe_log_identifier(record.id, prefix="uid"),
            safe_log_email(email),
            record.type.value,
        )
        return self.to_user(record)

    async def login(self, *, email: str, password: str) -> str:
        record = self._users.find_one({"email": email.strip()})
        if record is None or not await run_in_threadpool(
            self._credentials.compare_hash, password, record.password_hash
        ):
            logger.warning("users.login_failed email=%s", safe_log_email(email))
            raise UnauthorizedError("INVALID_CREDENTIALS", "Invalid email or password")

        return self._credentials.generate_token(TokenData(id=record.id))

    def list_users(self) -> list[User]:
        return [self.to_user(record) for record in self._users.find_all()]

    def get_user(self, *, user_id: int) -> User:
        record = self._users.find_one({"id": user_id})
        if record is None:
            raise BadRequestError("USER_NOT_FOUND", "User not found")
        return self.to_user(record)

    @staticmethod
    def to_user(record: UserRecord) -> User:
        return User(id=record.id, email=record.email, type=record.type)
