from core.exceptions import ChirpTooLongError

MAX_CHIRP_LENGTH = 140
CENSORED_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
MASK = "****"


def validate_chirp(body: str) -> str:
    """
    Enforce the chirp length limit and mask profane words.

    Length is counted in characters. Words are split on single spaces and
    compared case-insensitively as whole words, so punctuation attached to a
    word ("kerfuffle!") keeps it from matching.

    Returns:
        The cleaned body

    Raises:
        ChirpTooLongError: body is longer than MAX_CHIRP_LENGTH
    """
    if len(body) > MAX_CHIRP_LENGTH:
        raise ChirpTooLongError()

    words = body.split(" ")
    cleaned = [MASK if word.lower() in CENSORED_WORDS else word for word in words]
    return " ".join(cleaned)
