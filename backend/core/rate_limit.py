"""
Filadex: Shared slowapi rate limiter instance.

Import this module in the app factory and any router that needs
@limiter.limit() decorators. Key function: get_remote_address (IP-based).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
