"""Per-client request throttling for the dashboard API (slowapi).

Reads share the default budget. Routes that write to the record store
(check-in, check-out, leave apply) carry the tighter ``WRITE_LIMIT`` since
the store does not deduplicate repeated submissions.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

READ_LIMIT = "60/minute"
WRITE_LIMIT = "10/minute"

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[READ_LIMIT],
)
