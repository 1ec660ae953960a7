# core/errors.py

from dataclasses import dataclass
from typing import Optional


class CofradeError(RuntimeError):
    """Base class for every failure raised by the app."""


class InvalidRequestError(CofradeError):
    """The form cannot be submitted; carries its own user-facing text."""

    def __init__(self, title: str, message: str):
        super().__init__(f"{title}: {message}")
        self.title = title
        self.message = message


class MissingApiKeyError(CofradeError):
    def __init__(self, message: str = "Environment variable GEMINI_API_KEY (or API_KEY) is missing."):
        super().__init__(message)


class MalformedResponseError(CofradeError):
    pass


class ProxyError(CofradeError):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"proxy {status_code}: {message}")
        self.status_code = status_code


@dataclass
class ErrorBanner:
    title: str
    message: str
    detail: Optional[str] = None


GENERIC_TITLE = "Corte en la Procesión"
GENERIC_MESSAGE = (
    "No hemos podido conectar con los datos de 2025. Revisa que tu API_KEY "
    "esté configurada correctamente y vuelve a intentarlo."
)
CREDENTIAL_TITLE = "Llave de San Pedro Errónea"
CREDENTIAL_MESSAGE = (
    "La API_KEY no es válida o no ha sido detectada. Asegúrate de haber "
    "guardado GEMINI_API_KEY en tu entorno (o en el archivo .env) y de haber "
    "reiniciado la aplicación."
)


def is_credential_error(exc: BaseException) -> bool:
    if isinstance(exc, MissingApiKeyError):
        return True
    # google.genai.errors.APIError and ProxyError both expose an HTTP code
    code = getattr(exc, "code", None) or getattr(exc, "status_code", None)
    if code in (401, 403):
        return True
    text = str(exc)
    return "401" in text or "API_KEY" in text


def error_banner(exc: BaseException, debug: bool = False) -> ErrorBanner:
    """Collapse any failure into the title/message pair shown to the user."""
    if isinstance(exc, InvalidRequestError):
        return ErrorBanner(exc.title, exc.message)

    if is_credential_error(exc):
        banner = ErrorBanner(CREDENTIAL_TITLE, CREDENTIAL_MESSAGE)
    else:
        banner = ErrorBanner(GENERIC_TITLE, GENERIC_MESSAGE)

    if debug:
        banner.detail = f"{type(exc).__name__}: {exc}"
    return banner
