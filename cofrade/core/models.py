# core/models.py

from dataclasses import dataclass, field, asdict
from typing import List, Optional

from cofrade.core.errors import InvalidRequestError

CITIES = (
    "Sevilla", "Málaga", "Granada", "Córdoba", "Jerez de la Frontera",
    "Cádiz", "Huelva", "Jaén", "Almería",
)

HOLY_DAYS = (
    "Viernes de Dolores", "Sábado de Pasión", "Domingo de Ramos",
    "Lunes Santo", "Martes Santo", "Miércoles Santo",
    "Jueves Santo", "Madrugá", "Viernes Santo",
    "Sábado Santo", "Domingo de Resurrección",
)

DEFAULT_CITY = "Sevilla"
DEFAULT_DAY = "Domingo de Ramos"
DEFAULT_SOURCE_TITLE = "Info oficial"


@dataclass
class ItineraryRequest:
    city: str = DEFAULT_CITY
    day: str = DEFAULT_DAY
    vibe: str = ""


@dataclass
class ItineraryItem:
    hour: str
    brotherhood: str
    location: str
    vibe_reason: str
    details: Optional[str] = None


@dataclass
class ItineraryResponse:
    city: str
    day: str
    plan_title: str
    itinerary: List[ItineraryItem] = field(default_factory=list)
    extra_tips: str = ""

    def to_dict(self) -> dict:
        data = asdict(self)
        for item in data["itinerary"]:
            if item["details"] is None:
                del item["details"]
        return data


@dataclass
class Source:
    uri: str
    title: str = ""

    @property
    def label(self) -> str:
        return self.title or DEFAULT_SOURCE_TITLE

    def to_markdown(self) -> str:
        """Markdown link; brackets in the title and parens in the URI are escaped."""
        label = self.label.replace("[", "\\[").replace("]", "\\]")
        uri = self.uri.replace("(", "%28").replace(")", "%29").replace(" ", "%20")
        return f"[{label}]({uri})"


@dataclass
class ItineraryResult:
    response: ItineraryResponse
    sources: List[Source] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = self.response.to_dict()
        data["sources"] = [asdict(s) for s in self.sources]
        return data


def validate_request(req: ItineraryRequest) -> None:
    """Raise InvalidRequestError if the form cannot be submitted as is."""
    if not (req.vibe or "").strip():
        raise InvalidRequestError(
            "Falta tu preferencia",
            "Dime qué buscas hoy: ¿silencio?, ¿música?, ¿barrios?, ¿bulla?",
        )
    validate_choices(req)


def validate_choices(req: ItineraryRequest) -> None:
    """City and day must come from the fixed lists."""
    if req.city not in CITIES:
        raise InvalidRequestError(
            "Ciudad desconocida",
            f"«{req.city}» no está en la guía. Elige una de: {', '.join(CITIES)}.",
        )
    if req.day not in HOLY_DAYS:
        raise InvalidRequestError(
            "Día desconocido",
            f"«{req.day}» no es un día de la Semana Santa de la guía.",
        )
