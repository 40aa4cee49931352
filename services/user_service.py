import uuid
from sqlalchemy.exc import IntegrityError
from core.exceptions import EmailAlreadyRegisteredError, UserMissingError
from models.users import User
from services.stores import UserStore
from utils.hashing import get_password_hash
from utils.logger import get_logger

logger = get_logger(__name__)


class UserService:

    def __init__(self, users: UserStore):
        self.users = users

    def create_user(self, email: str, password: str) -> User:
        """
        Registers a new user with a bcrypt-hashed password.

        Raises:
            EmailAlreadyRegisteredError: email is taken
        """
        email = email.lower().strip()
        if self.users.find_by_email(email):
            logger.warning("Registration attempt with existing email", extra={"email": email})
            raise EmailAlreadyRegisteredError()

        try:
            user = self.users.add(email, get_password_hash(password))
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            self.users.db.rollback()
            raise EmailAlreadyRegisteredError()

        logger.info("User registered successfully", extra={"user_id": str(user.id)})
        return user

    def upgrade_to_red(self, user_id: uuid.UUID):
        """
        Raises:
            UserMissingError: no user with this ID
        """
        if not self.users.upgrade_to_red(user_id):
            logger.warning("Upgrade requested for unknown user", extra={"user_id": str(user_id)})
            raise UserMissingError()

        logger.info("User upgraded to Chirpy Red", extra={"user_id": str(user_id)})

    def reset_users(self):
        self.users.delete_all()
        logger.warning("All users deleted")
