from __future__ import annotations

from typing import Any, Dict, Mapping

from fastapi import APIRouter

from ..services.session_stats import guild_count


def register(router: APIRouter, context: Mapping[str, Any]) -> None:
    """
    GET /guilds/count -> {"guildCount": <int>}

    Reads the live bot session from context["client"] on every request;
    0 when there is no session or it has no guild cache yet.
    """
    client = context.get("client")

    @router.get("/guilds/count", tags=["stats"])
    def get_guild_count() -> Dict[str, int]:
        return {"guildCount": guild_count(client)}
