# tests/test_errors.py

from cofrade.core.errors import (
    CREDENTIAL_TITLE,
    GENERIC_TITLE,
    InvalidRequestError,
    MalformedResponseError,
    MissingApiKeyError,
    ProxyError,
    error_banner,
)


class FakeAPIError(Exception):
    def __init__(self, code, message):
        super().__init__(f"{code} {message}")
        self.code = code


def test_invalid_request_keeps_its_own_text():
    banner = error_banner(InvalidRequestError("Falta tu preferencia", "Dime qué buscas"))
    assert banner.title == "Falta tu preferencia"
    assert banner.message == "Dime qué buscas"
    assert banner.detail is None


def test_missing_key_is_a_credential_error():
    assert error_banner(MissingApiKeyError()).title == CREDENTIAL_TITLE


def test_invalid_key_message_is_a_credential_error():
    exc = FakeAPIError(400, "API key not valid. reason: API_KEY_INVALID")
    assert error_banner(exc).title == CREDENTIAL_TITLE


def test_401_code_is_a_credential_error():
    assert error_banner(FakeAPIError(401, "Unauthorized")).title == CREDENTIAL_TITLE
    assert error_banner(ProxyError(403, "forbidden")).title == CREDENTIAL_TITLE


def test_everything_else_is_generic():
    assert error_banner(MalformedResponseError("bad json")).title == GENERIC_TITLE
    assert error_banner(ConnectionError("network down")).title == GENERIC_TITLE
    assert error_banner(ProxyError(500, "Error generando itinerario")).title == GENERIC_TITLE


def test_debug_exposes_raw_text():
    banner = error_banner(ConnectionError("network down"), debug=True)
    assert banner.detail == "ConnectionError: network down"
    assert error_banner(ConnectionError("network down")).detail is None
