# run.py

import argparse
import logging
import sys

from dotenv import load_dotenv
from rich import print
from rich.logging import RichHandler
from rich.markup import escape

from cofrade.ai import gemini
from cofrade.core.config import load_settings
from cofrade.core.errors import error_banner
from cofrade.core.models import CITIES, DEFAULT_CITY, DEFAULT_DAY, HOLY_DAYS, ItineraryRequest, validate_request
from cofrade.services import proxy_client
from cofrade.services.share import whatsapp_share_url

logger = logging.getLogger("cofrade")


def main(argv=None) -> int:
    load_dotenv()   # Load variables from .env
    settings = load_settings()

    p = argparse.ArgumentParser(description="Itinerario cofrade generado con Gemini")
    p.add_argument("--city", choices=CITIES, default=DEFAULT_CITY)
    p.add_argument("--day", choices=HOLY_DAYS, default=DEFAULT_DAY)
    p.add_argument("--vibe", required=True)
    p.add_argument("--proxy", action="store_true",
                   help="use COFRADE_PROXY_URL instead of calling Gemini directly")
    p.add_argument("--debug", action="store_true", help="show raw error text")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=settings.log_level, format="%(message)s", handlers=[RichHandler(show_path=False)]
    )
    debug = args.debug or settings.debug

    req = ItineraryRequest(city=args.city, day=args.day, vibe=args.vibe)
    try:
        validate_request(req)
        print("[bold cyan]→ Trazando tu ruta…[/]")
        if args.proxy:
            result = proxy_client.fetch_itinerary(req, settings)
        else:
            result = gemini.generate_itinerary(req, settings)
    except Exception as e:
        logger.debug("Itinerary generation failed", exc_info=True)
        banner = error_banner(e, debug)
        print(f"[bold red]{escape(banner.title)}[/]")
        print(escape(banner.message))
        if banner.detail:
            print(f"[dim]{escape(banner.detail)}[/]")
        return 1

    # model text may contain "[...]"; everything interpolated is escaped
    plan = result.response
    print(f"\n[bold green]{escape(plan.plan_title)}[/]")
    print(f"[dim]{escape(plan.city)} · {escape(plan.day)}[/]\n")
    for i, item in enumerate(plan.itinerary, start=1):
        print(f"[yellow]{i}. {escape(item.hour)}[/]  [bold]{escape(item.brotherhood)}[/]")
        print(f"   📍 {escape(item.location)}")
        print(f"   [italic]\"{escape(item.vibe_reason)}\"[/]\n")

    if plan.extra_tips:
        print(f"[cyan]{escape(plan.extra_tips)}[/]\n")

    if result.sources:
        print("[dim]Fuentes:[/]")
        for s in result.sources:
            print(f"  - {escape(s.label)}: {escape(s.uri)}")

    print(f"\nCompartir: {whatsapp_share_url(plan)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
