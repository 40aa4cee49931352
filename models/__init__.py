from models.users import User
from models.chirps import Chirp
from models.refresh_tokens import RefreshToken

__all__ = ["User", "Chirp", "RefreshToken"]
