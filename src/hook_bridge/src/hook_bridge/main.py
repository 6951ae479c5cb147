"""FastAPI bridge between the services daemon and the hook handlers.

The daemon posts hook invocations and services commands here; handlers run
one at a time against the registered host implementation and report back
whether the daemon may proceed.
"""

from __future__ import annotations

import logging
import threading

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI  # noqa: E402

import memory_services_impl  # noqa: F401, E402  # ensure a host implementation registers itself
from hook_bridge import hooks  # noqa: F401, E402  # register hook modules
from hook_bridge.hooks import registry  # noqa: E402
from hook_bridge.models import AccountInfoReply, CommandReply, CommandRequest, HookReply, HookRequest  # noqa: E402

app = FastAPI(title="Services Hook Bridge", version="0.1.0")

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("hook_bridge")

# The daemon dispatches hooks one at a time; FastAPI runs sync routes in a thread pool.
_DISPATCH_LOCK = threading.Lock()


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/health")
def health() -> dict[str, str]:
    """Return a basic health payload."""
    return {"status": "ok"}


@app.get("/hooks")
def hooks_index() -> dict[str, list[str]]:
    """List registered handlers per hook."""
    return registry.list_hooks()


@app.post("/events", response_model=HookReply)
def handle_event(request: HookRequest) -> HookReply:
    """Run every handler registered for the event's hook."""
    event = request.event
    logger.info("Hook %s received", event.kind)
    with _DISPATCH_LOCK:
        results = registry.run_hook(event.kind, event)
    failed = sum(1 for result in results if _is_failure(result))
    may_proceed = all(result is not False for result in results)
    return HookReply(hook=event.kind, handled=len(results), failed=failed, may_proceed=may_proceed)


@app.post("/commands/{name}", response_model=CommandReply)
def handle_command(name: str, request: CommandRequest) -> CommandReply:
    """Run a services command on behalf of an authorized user."""
    logger.info("Command %s from %s", name.upper(), request.source)
    with _DISPATCH_LOCK:
        result = registry.run_command(name, request.params, source=request.source)
    return CommandReply.model_validate(result)


@app.get("/accounts/{account}/info", response_model=AccountInfoReply)
def account_info(account: str) -> AccountInfoReply:
    """Collect INFO lines contributed by the hooks."""
    with _DISPATCH_LOCK:
        results = registry.run_hook("account_info", account)
    lines = [line for result in results if isinstance(result, list) for line in result]
    return AccountInfoReply(account=account, lines=lines)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_failure(result: object) -> bool:
    return isinstance(result, dict) and result.get("type") == "error"
