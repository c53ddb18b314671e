import logging
import math
from typing import Optional

from showroom.core import EXCHANGE_RATE_KEY
from showroom.database import DataFetchError

logger = logging.getLogger("showroom.rates")

FALLBACK_RATE = 50.0


def init_rate() -> float:
    return FALLBACK_RATE


def parse_rate(raw) -> Optional[float]:
    """Return ``raw`` as a finite float, or ``None`` if it is not one."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


class ExchangeRateState:
    """USD->EGP rate for one session.

    Starts at the fallback constant. Only ``refresh`` writes it, and a failed
    refresh keeps whatever value was there before.
    """

    def __init__(self, rate: float = FALLBACK_RATE):
        self.rate = rate

    def refresh(self, store) -> float:
        try:
            raw = store.fetch_setting(EXCHANGE_RATE_KEY)
        except DataFetchError as e:
            logger.warning("Exchange rate fetch failed, keeping %s: %s", self.rate, e)
            return self.rate

        value = parse_rate(raw)
        if value is None:
            logger.warning("Exchange rate setting %s is missing or malformed (%r), keeping %s",
                           EXCHANGE_RATE_KEY, raw, self.rate)
            return self.rate

        self.rate = value
        logger.debug("Exchange rate updated to %s", value)
        return self.rate
