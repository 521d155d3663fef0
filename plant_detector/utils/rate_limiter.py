from slowapi import Limiter
from slowapi.util import get_remote_address

from plant_detector.config import RATE_LIMIT_ENABLED

# Shared by every router so app.state.limiter sees the same counters
limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)
