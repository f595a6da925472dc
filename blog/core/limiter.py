"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Like and view endpoints are not limited.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

LOGIN_LIMIT = "10/minute"
SIGNUP_LIMIT = "5/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"

limit_auth = limiter.limit(LOGIN_LIMIT)
limit_signup = limiter.limit(SIGNUP_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
