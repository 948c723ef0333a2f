import pytest

from foodlens.errors import (
    RemoteServiceError,
    ServiceSaturatedError,
    TransientServiceError,
    error_for_status,
)


@pytest.mark.parametrize("code", [503, 529])
def test_overload_status_is_transient(code):
    err = error_for_status(code, "busy")

    assert isinstance(err, TransientServiceError)
    assert err.status_code == code


def test_gemini_unavailable_status_is_transient_without_code():
    assert isinstance(error_for_status(None, "x", "UNAVAILABLE"), TransientServiceError)


@pytest.mark.parametrize(
    "code,status,category",
    [
        (401, None, "auth"),
        (403, None, "auth"),
        (429, None, "quota"),
        (None, "RESOURCE_EXHAUSTED", "quota"),
        (400, None, "bad_request"),
        (413, None, "bad_request"),
        (500, None, "unknown"),
    ],
)
def test_permanent_statuses_are_categorised(code, status, category):
    err = error_for_status(code, "nope", status)

    assert isinstance(err, RemoteServiceError)
    assert not isinstance(err, TransientServiceError)
    assert err.category == category
    assert err.status_code == code


def test_message_text_never_drives_classification():
    """An "overloaded" message on a 400 is still a bad request."""
    err = error_for_status(400, "503 model overloaded")

    assert isinstance(err, RemoteServiceError)
    assert err.category == "bad_request"


def test_saturated_error_carries_attempts():
    err = ServiceSaturatedError(3)

    assert err.attempts == 3
    assert "3" in str(err)
    assert "unavailable" in str(err)
    assert "overloaded" not in str(err)
    assert not isinstance(err, TransientServiceError)
