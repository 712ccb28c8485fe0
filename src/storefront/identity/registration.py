"""User registration: command, handler and sign-up workflow.

The password is hashed before the command is built, so plaintext never reaches
the command store.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.credentials import hash_password, issue_token
from storefront.identity.user import User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class EmailAlreadyRegistered(ValidationError):
    """Sign-up was attempted with an email that already has an account."""

    MESSAGE = "Email is already registered."

    def __init__(self, email: str) -> None:
        super().__init__({"email": [self.MESSAGE]})
        self.email = email


@storefront.command(part_of="User")
class SignUp:
    name: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)


@storefront.command_handler(part_of=User)
class SignUpHandler:
    @handle(SignUp)
    def sign_up(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise EmailAlreadyRegistered(command.email)

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=command.password_hash,
        )
        repo.add(user)
        return str(user.id)


def _validate_password(password: str | None) -> None:
    if not password:
        raise ValidationError({"password": ["is required"]})
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError({"password": [f"must be at most {MAX_PASSWORD_BYTES} bytes"]})


def sign_up(name: str, email: str, password: str) -> str:
    """Create an account and return a bearer token for it."""
    _validate_password(password)
    SignUp(name=name, email=email, password_hash="-")  # Validate the rest before paying for bcrypt

    user_id = current_domain.process(
        SignUp(name=name, email=email, password_hash=hash_password(password)),
        asynchronous=False,
    )
    logger.info("User signed up", user_id=user_id)
    return issue_token(user_id)
