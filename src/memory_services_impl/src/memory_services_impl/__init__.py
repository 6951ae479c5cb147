"""Public exports for the in-memory services host implementation."""

from memory_services_impl.host_impl import MemoryHost, get_host_impl, reset_host_impl
from memory_services_impl.host_impl import register as _register_host


def register() -> None:
    """Register the in-memory host implementation."""
    _register_host()


register()

__all__ = ["MemoryHost", "get_host_impl", "register", "reset_host_impl"]
