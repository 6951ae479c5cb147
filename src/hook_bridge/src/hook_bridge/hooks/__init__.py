"""Hook modules; importing this package registers every handler."""

from hook_bridge.hooks import enrichment_hooks, identity_hooks

__all__ = ["enrichment_hooks", "identity_hooks"]
