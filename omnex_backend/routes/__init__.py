"""
Route package for the Omnex asset explorer.
Importing this package is side-effect free; route registration is explicit.
"""
from .registry import register_all_routes, register_routes, security_headers_middleware

__all__ = [
    "register_routes",
    "register_all_routes",
    "security_headers_middleware",
]
