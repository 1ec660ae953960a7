# services/loading.py

import itertools
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Callable, Iterator, TypeVar

T = TypeVar("T")

LOADING_MESSAGES = (
    "Abriendo el programa de mano...",
    "Consultando recorridos oficiales 2025...",
    "Buscando el mejor sitio para ver la cofradía...",
    "Siguiendo el rastro del incienso y el azahar...",
    "Esperando a que pase el último tramo de nazarenos...",
    "Afinando las marchas procesionales...",
)

LOADING_INTERVAL_SEC = 2.5


def message_cycle() -> Iterator[str]:
    return itertools.cycle(LOADING_MESSAGES)


def run_with_messages(
    fn: Callable[[], T],
    on_message: Callable[[str], None],
    interval: float = LOADING_INTERVAL_SEC,
) -> T:
    """
    Run `fn` on a worker thread and call `on_message` with the next loading
    message every `interval` seconds until it finishes.
    Returns fn's result, or re-raises its exception.
    """
    messages = message_cycle()
    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(fn)
        while True:
            try:
                return future.result(timeout=interval)
            except FutureTimeout:
                on_message(next(messages))
