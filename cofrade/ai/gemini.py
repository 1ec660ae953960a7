# ai/gemini.py
# ------------------------------------------------------------------------------
import json
import logging
import textwrap
from typing import Any, List, Optional

from google import genai
from google.genai import types

from cofrade.core.config import Settings, load_settings
from cofrade.core.errors import MalformedResponseError, MissingApiKeyError
from cofrade.core.models import (
    ItineraryItem,
    ItineraryRequest,
    ItineraryResponse,
    ItineraryResult,
    Source,
)

logger = logging.getLogger(__name__)

SEASON = 2025

# ──────────────────────────────────────────────────────────────────────────────
# Helper: a fresh client per call, built from the current key
# ──────────────────────────────────────────────────────────────────────────────
def _get_client(settings: Settings):
    if not settings.api_key:
        raise MissingApiKeyError()
    return genai.Client(api_key=settings.api_key)

# ──────────────────────────────────────────────────────────────────────────────
# Prompt template
# ──────────────────────────────────────────────────────────────────────────────
_PROMPT_TEMPLATE = textwrap.dedent(
    """\
    Actúa como un experto cronista de la Semana Santa andaluza.
    Genera un itinerario para la ciudad de {city} el día {day}.
    El usuario busca este ambiente: "{vibe}".

    REQUISITOS:
    1. Usa Google Search para obtener horarios y recorridos REALES DE {season}.
    2. Diseña un plan con 4 momentos clave: Mañana/Salida, Tarde, Noche y Recogida.
    3. Sé muy específico con calles y plazas de {city}.
    4. Explica detalladamente por qué cada punto encaja con su preferencia ("{vibe}").
    5. Responde con un JSON estructurado según el esquema.
    """
)

ITEM_FIELDS = ("hour", "brotherhood", "location", "vibe_reason")
REQUIRED_FIELDS = ("city", "day", "plan_title", "itinerary")

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "city": {"type": "STRING"},
        "day": {"type": "STRING"},
        "plan_title": {"type": "STRING"},
        "itinerary": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {name: {"type": "STRING"} for name in ITEM_FIELDS},
                "required": list(ITEM_FIELDS),
            },
        },
        "extra_tips": {"type": "STRING"},
    },
    "required": list(REQUIRED_FIELDS),
}


def build_prompt(req: ItineraryRequest) -> str:
    """Return the prompt string sent to Gemini for this request."""
    return _PROMPT_TEMPLATE.format(
        city=req.city,
        day=req.day,
        vibe=req.vibe.strip(),
        season=SEASON,
    )


def build_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        tools=[types.Tool(google_search=types.GoogleSearch())],
        response_mime_type="application/json",
        response_schema=RESPONSE_SCHEMA,
    )

# ──────────────────────────────────────────────────────────────────────────────
# Calls
# ──────────────────────────────────────────────────────────────────────────────
def _generate(req: ItineraryRequest, settings: Optional[Settings], client):
    settings = settings or load_settings()
    client = client or _get_client(settings)
    logger.info("Requesting itinerary for %s / %s (model=%s)", req.city, req.day, settings.model)
    return client.models.generate_content(
        model=settings.model,
        contents=build_prompt(req),
        config=build_config(),
    )


def generate_itinerary(
    req: ItineraryRequest,
    settings: Optional[Settings] = None,
    client=None,
) -> ItineraryResult:
    """
    Send the request to Gemini with Google Search grounding and the JSON
    schema, then map the answer to an ItineraryResult (plan + cited sources).
    """
    resp = _generate(req, settings, client)
    itinerary = parse_itinerary(getattr(resp, "text", None))
    sources = extract_sources(resp)
    logger.info("Itinerary ready: %d stops, %d sources", len(itinerary.itinerary), len(sources))
    return ItineraryResult(response=itinerary, sources=sources)


def generate_raw_text(
    req: ItineraryRequest,
    settings: Optional[Settings] = None,
    client=None,
) -> str:
    """Same call as generate_itinerary, returning Gemini's text untouched."""
    resp = _generate(req, settings, client)
    text = getattr(resp, "text", None)
    if not text:
        raise MalformedResponseError("Gemini returned an empty response.")
    return text

# ──────────────────────────────────────────────────────────────────────────────
# Response handling
# ──────────────────────────────────────────────────────────────────────────────
def parse_itinerary(text: Optional[str]) -> ItineraryResponse:
    if not text or not text.strip():
        raise MalformedResponseError("Gemini returned an empty response.")

    # The answer is sometimes wrapped as "```json\n{ ... }\n```"
    raw_json = text.strip().strip("`json \n")
    try:
        data = json.loads(raw_json)
    except ValueError as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError("Response JSON is not an object.")
    missing = [k for k in REQUIRED_FIELDS if k not in data]
    if missing:
        raise MalformedResponseError(f"Response is missing keys: {', '.join(missing)}")
    if not isinstance(data["itinerary"], list):
        raise MalformedResponseError("'itinerary' must be a list.")

    items = []
    for i, entry in enumerate(data["itinerary"]):
        if not isinstance(entry, dict) or any(k not in entry for k in ITEM_FIELDS):
            raise MalformedResponseError(f"Itinerary item {i} is incomplete.")
        items.append(
            ItineraryItem(
                hour=str(entry["hour"]),
                brotherhood=str(entry["brotherhood"]),
                location=str(entry["location"]),
                vibe_reason=str(entry["vibe_reason"]),
                details=None if entry.get("details") is None else str(entry["details"]),
            )
        )

    return ItineraryResponse(
        city=str(data["city"]),
        day=str(data["day"]),
        plan_title=str(data["plan_title"]),
        itinerary=items,
        extra_tips=str(data.get("extra_tips") or ""),
    )


def _field(obj: Any, name: str, camel: Optional[str] = None) -> Any:
    """Read `name` from an SDK object or from a plain dict (REST payload)."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        value = obj.get(name)
        return value if value is not None or camel is None else obj.get(camel)
    return getattr(obj, name, None)


def extract_sources(resp: Any) -> List[Source]:
    """Web sources consulted by Gemini, in the order it reports them."""
    candidates = _field(resp, "candidates") or []
    if not candidates:
        return []
    metadata = _field(candidates[0], "grounding_metadata", "groundingMetadata")
    chunks = _field(metadata, "grounding_chunks", "groundingChunks") or []

    sources = []
    for chunk in chunks:
        web = _field(chunk, "web")
        uri = _field(web, "uri")
        if not uri:
            continue
        sources.append(Source(uri=uri, title=_field(web, "title") or ""))
    return sources
