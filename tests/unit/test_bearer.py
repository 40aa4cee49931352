import pytest
from core.exceptions import MissingHeaderError
from utils.deps import extract_bearer_token


def test_strips_bearer_prefix():
    assert extract_bearer_token("Bearer abc123") == "abc123"


def test_prefix_is_optional():
    assert extract_bearer_token("abc123") == "abc123"


@pytest.mark.parametrize("header", [None, ""])
def test_missing_header(header):
    with pytest.raises(MissingHeaderError):
        extract_bearer_token(header)


def test_only_the_exact_prefix_is_stripped():
    assert extract_bearer_token("bearer abc123") == "bearer abc123"
