"""Tool registry. Each module exposes a ``TOOL`` built from the shared schema."""

from __future__ import annotations

from ..core.tool import Tool
from . import (
    add,
    backup,
    branch,
    checkout,
    clean,
    clone,
    commit,
    dev,
    diff,
    fix,
    flow,
    fresh,
    init,
    listing,
    log,
    pop,
    pull,
    push,
    quick,
    release,
    remote,
    reset,
    save,
    stash,
    status,
    sync,
    workflow,
)

_TOOLS: tuple[Tool, ...] = (
    status.TOOL,
    diff.TOOL,
    add.TOOL,
    commit.TOOL,
    branch.TOOL,
    checkout.TOOL,
    clone.TOOL,
    init.TOOL,
    log.TOOL,
    pop.TOOL,
    pull.TOOL,
    push.TOOL,
    remote.TOOL,
    remote.REMOVE_TOOL,
    reset.TOOL,
    stash.TOOL,
    backup.TOOL,
    clean.TOOL,
    dev.TOOL,
    fix.TOOL,
    flow.TOOL,
    fresh.TOOL,
    listing.TOOL,
    quick.TOOL,
    release.TOOL,
    save.TOOL,
    sync.TOOL,
    workflow.TOOL,
)

REGISTRY: dict[str, Tool] = {t.name: t for t in _TOOLS}


def all_tools() -> list[Tool]:
    return list(_TOOLS)


def get_tool(name: str) -> Tool:
    try:
        return REGISTRY[name]
    except KeyError:
        raise KeyError(f"unknown tool: {name}") from None
