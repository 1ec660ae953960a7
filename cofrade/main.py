# main.py

import logging
from dataclasses import asdict

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from cofrade.ai import gemini
from cofrade.core.config import load_settings
from cofrade.core.errors import InvalidRequestError, error_banner
from cofrade.core.models import ItineraryRequest, validate_choices, validate_request

# Load .env before any setting is read
load_dotenv()

logging.basicConfig(level=load_settings().log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Guía Cofrade")

PROXY_PATH = "/api/generateItinerary"
PROXY_ERROR_BODY = {"error": "Error generando itinerario"}


# Schema for the itinerary request body; city/day are checked by the handlers
class ItineraryBody(BaseModel):
    city: str = Field(..., description="Una de las ciudades de la guía")
    day: str = Field(..., description="Día de la Semana Santa")
    vibe: str = Field("", description="Ambiente que busca el usuario")

    def to_request(self) -> ItineraryRequest:
        return ItineraryRequest(city=self.city, day=self.day, vibe=self.vibe)


@app.exception_handler(RequestValidationError)
async def _invalid_body(request: Request, exc: RequestValidationError):
    """Unreadable bodies: fixed 500 on the proxy, 400 banner elsewhere."""
    logger.warning("Rejected body on %s: %s", request.url.path, exc.errors())
    if request.url.path == PROXY_PATH:
        return JSONResponse(status_code=500, content=PROXY_ERROR_BODY)
    banner = error_banner(
        InvalidRequestError("Petición inválida", "Envía un JSON con city, day y vibe.")
    )
    return JSONResponse(status_code=400, content=asdict(banner))


@app.get("/")
def read_root():
    settings = load_settings()
    return {
        "status": "ok",
        "gemini_api_key": bool(settings.api_key),
        "model": settings.model,
    }


@app.post(PROXY_PATH)
def generate_itinerary_proxy(body: ItineraryBody):
    """Pass-through: Gemini's raw text on success, a fixed error body otherwise."""
    try:
        req = body.to_request()
        validate_choices(req)
        text = gemini.generate_raw_text(req, load_settings())
        return PlainTextResponse(text, media_type="application/json")
    except Exception:
        logger.error("Proxy itinerary generation failed", exc_info=True)
        return JSONResponse(status_code=500, content=PROXY_ERROR_BODY)


@app.post("/api/itinerary")
def generate_itinerary_endpoint(body: ItineraryBody):
    settings = load_settings()
    req = body.to_request()
    try:
        validate_request(req)
        result = gemini.generate_itinerary(req, settings)
        return result.to_dict()
    except InvalidRequestError as e:
        return JSONResponse(status_code=400, content=asdict(error_banner(e)))
    except Exception as e:
        logger.error("Itinerary generation failed: %s", e, exc_info=True)
        return JSONResponse(status_code=500, content=asdict(error_banner(e, settings.debug)))
