from slowapi import Limiter
from slowapi.util import get_remote_address

# Keyed by client IP; attached to ``app.state`` in ``travloger.main``
limiter = Limiter(key_func=get_remote_address)
