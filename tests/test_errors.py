import pytest

from plot_market.core.errors import (
    ApiError,
    MarketplaceError,
    NetworkError,
    ValidationError,
    error_message,
    raise_api_error,
)
from plot_market.core.validation import is_valid_email, optional_text, reject_blank, require_text


TABLE = {404: "Plot not found", 500: "Server error. Please try again later"}


def test_status_table_wins_over_server_text():
    error = {"status_code": 404, "detail": "no such plot"}
    assert error_message(error, TABLE, "Failed") == "Plot not found"


def test_server_text_used_for_unmapped_status():
    error = {"status_code": 422, "detail": "Bad date"}
    assert error_message(error, TABLE, "Failed") == "Bad date"


def test_default_when_nothing_else_is_known():
    assert error_message({"status_code": None, "detail": None}, TABLE, "Failed") == "Failed"


def test_network_failure_raises_network_error():
    with pytest.raises(NetworkError) as exc_info:
        raise_api_error({"status_code": None, "code": "timeout"}, TABLE, "Failed")
    assert str(exc_info.value) == "Failed"


def test_http_failure_raises_api_error_with_status():
    with pytest.raises(ApiError) as exc_info:
        raise_api_error({"status_code": 500, "code": "http"}, TABLE, "Failed")
    assert not isinstance(exc_info.value, NetworkError)
    assert exc_info.value.status_code == 500
    assert isinstance(exc_info.value, MarketplaceError)


def test_text_helpers():
    assert require_text("  x ", "missing") == "x"
    with pytest.raises(ValidationError, match="missing"):
        require_text(None, "missing")
    assert optional_text("   ") is None
    assert reject_blank("", "bad") is None
    with pytest.raises(ValidationError, match="bad"):
        reject_blank("  ", "bad")


@pytest.mark.parametrize(
    "email, valid",
    [("a@b.co", True), ("a b@c.co", False), ("a@b", False), ("@b.co", False)],
)
def test_email_format(email, valid):
    assert is_valid_email(email) is valid
