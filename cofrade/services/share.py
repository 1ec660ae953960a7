# services/share.py

from urllib.parse import quote

from cofrade.core.models import ItineraryResponse

WHATSAPP_URL = "https://wa.me/?text="
FOOTER = "_Vía Guía Cofrade Pro 2025_"

# characters left untouched by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_share_text(plan: ItineraryResponse) -> str:
    header = f"*📿 Mi Itinerario Cofrade: {plan.plan_title}*\n_{plan.city} - {plan.day}_\n\n"
    stops = "\n\n".join(
        f"📍 *{item.hour}*: {item.brotherhood}\n   _{item.location}_"
        for item in plan.itinerary
    )
    return header + stops + f"\n\n{FOOTER}"


def whatsapp_share_url(plan: ItineraryResponse) -> str:
    """Deep link that opens WhatsApp with the plan pre-filled."""
    return WHATSAPP_URL + quote(build_share_text(plan), safe=_URI_COMPONENT_SAFE)
