from __future__ import annotations

from typing import Any, Dict, Mapping

from fastapi import APIRouter

from ..services.session_stats import is_ready, latency_ms, user_tag


class _StatusRoutes:
    def register(self, router: APIRouter, context: Mapping[str, Any]) -> None:
        client = context.get("client")

        @router.get("/status", tags=["stats"])
        def get_status() -> Dict[str, Any]:
            return {
                "ready": is_ready(client),
                "user": user_tag(client),
                "latencyMs": latency_ms(client),
            }


routes = _StatusRoutes()
