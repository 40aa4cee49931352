import uuid
from sqlalchemy.orm import Session
from core.exceptions import ChirpNotFoundError
from models.chirps import Chirp
from utils.censor import validate_chirp
from utils.logger import get_logger

logger = get_logger(__name__)


class ChirpService:

    @staticmethod
    def create_chirp(body: str, user_id: uuid.UUID, db: Session) -> Chirp:
        """
        Validates and censors the body, then stores the chirp.

        Raises:
            ChirpTooLongError: body exceeds the length limit
        """
        chirp = Chirp(body=validate_chirp(body), user_id=user_id)
        db.add(chirp)
        db.commit()
        db.refresh(chirp)

        logger.info("Chirp created", extra={"chirp_id": str(chirp.id), "user_id": str(user_id)})
        return chirp

    @staticmethod
    def get_all_chirps(db: Session) -> list[Chirp]:
        return db.query(Chirp).order_by(Chirp.created_at.asc()).all()

    @staticmethod
    def get_chirp(chirp_id: uuid.UUID, db: Session) -> Chirp:
        chirp = db.get(Chirp, chirp_id)
        if not chirp:
            raise ChirpNotFoundError()
        return chirp
