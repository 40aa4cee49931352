"""
Persistence collaborators used by the services.

Both stores wrap a request-scoped SQLAlchemy session and commit their own
writes.
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from models.users import User
from models.chirps import Chirp
from models.refresh_tokens import RefreshToken
from services.token_service import hash_refresh_token


class UserStore:

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def add(self, email: str, hashed_password: str) -> User:
        user = User(email=email, hashed_password=hashed_password)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def upgrade_to_red(self, user_id: uuid.UUID) -> bool:
        """Returns False when no such user exists."""
        updated = self.db.query(User).filter(User.id == user_id).update(
            {"is_chirpy_red": True}, synchronize_session="fetch"
        )
        self.db.commit()
        return updated > 0

    def delete_all(self):
        # Explicit order; SQLite does not enforce ON DELETE CASCADE by default
        self.db.query(RefreshToken).delete()
        self.db.query(Chirp).delete()
        self.db.query(User).delete()
        self.db.commit()


class RefreshTokenStore:
    """
    Refresh token state keyed by the raw token string.

    Only the SHA-256 digest of the token is persisted.
    """

    def __init__(self, db: Session):
        self.db = db

    def save(self, token: str, user_id: uuid.UUID, expires_at: datetime) -> RefreshToken:
        db_token = RefreshToken(
            token_hash=hash_refresh_token(token),
            user_id=user_id,
            expires_at=expires_at,
        )
        self.db.add(db_token)
        self.db.commit()
        return db_token

    def find_active(self, token: str) -> RefreshToken | None:
        """Returns the token row only if it is neither expired nor revoked."""
        return self.db.query(RefreshToken).filter(
            RefreshToken.token_hash == hash_refresh_token(token),
            RefreshToken.revoked_at.is_(None),
            RefreshToken.expires_at > datetime.now(timezone.utc),
        ).first()

    def revoke(self, token: str):
        """
        Marks the token revoked. Unknown or already revoked tokens are left
        untouched, so the first revocation time is kept.
        """
        now = datetime.now(timezone.utc)
        self.db.query(RefreshToken).filter(
            RefreshToken.token_hash == hash_refresh_token(token),
            RefreshToken.revoked_at.is_(None),
        ).update({"revoked_at": now, "updated_at": now}, synchronize_session="fetch")
        self.db.commit()
