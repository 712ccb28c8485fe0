"""Log-in: credential check plus the command that records the login."""

from dataclasses import dataclass

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.credentials import check_password, issue_token
from storefront.identity.user import User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# One message for unknown emails and wrong passwords, so responses do not reveal which accounts exist
LOGIN_FAILED = "Wrong email or password!"


@dataclass(frozen=True)
class LoginResult:
    success: bool
    token: str | None = None
    email: str | None = None
    name: str | None = None
    error: str | None = None


@storefront.command(part_of="User")
class RecordLogin:
    user_id: Identifier(required=True)


@storefront.command_handler(part_of=User)
class RecordLoginHandler:
    @handle(RecordLogin)
    def record_login(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.record_login()
        repo.add(user)


def log_in(email: str | None, password: str | None) -> LoginResult:
    user = current_domain.repository_for(User).find_by_email(email or "")
    if user is None or not check_password(password or "", user.password_hash):
        logger.info("Login rejected", email=email)
        return LoginResult(success=False, error=LOGIN_FAILED)

    current_domain.process(RecordLogin(user_id=str(user.id)), asynchronous=False)
    logger.info("User logged in", user_id=str(user.id))

    return LoginResult(
        success=True,
        token=issue_token(str(user.id), email=user.email, name=user.name),
        email=user.email,
        name=user.name,
    )
