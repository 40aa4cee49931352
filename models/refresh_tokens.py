from core.database import Base
from sqlalchemy import Column, DateTime, String, Uuid, ForeignKey
from sqlalchemy.orm import relationship
from models.mixins import CreatedAtMixin, UpdatedAtMixin

class RefreshToken(Base, CreatedAtMixin, UpdatedAtMixin):
    """
    Server-side state for an opaque refresh token.

    Only the SHA-256 digest of the token is stored. A token is usable while
    it is unexpired and ``revoked_at`` is NULL; once set, ``revoked_at`` is
    never cleared.
    """
    __tablename__ = "refresh_tokens"

    #pk
    token_hash = Column(String(64), primary_key=True)

    #fk
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    #relationships
    user = relationship("User", back_populates="refresh_tokens")

    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)
