from __future__ import annotations

import hashlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import MappingProxyType, ModuleType
from typing import Any, List, Mapping, Optional, Union

from fastapi import APIRouter

from ..registry import register_each

logger = logging.getLogger(__name__)

# Route modules live next to this file. Any `*.py` here except this one is loaded.
ROUTES_DIR = Path(__file__).resolve().parent
_SELF_NAME = Path(__file__).name

# Attribute a route module may use to export its registration value.
# Without it, the module object itself is the exported value.
EXPORT_NAME = "routes"

__all__ = ["build_api_router", "discover_route_files", "ROUTES_DIR", "EXPORT_NAME"]


def discover_route_files(routes_dir: Union[str, Path, None] = None) -> List[Path]:
    """
    List route module files in deterministic (name) order.

    Errors listing the directory propagate: a missing routes folder is a
    deployment problem, not a route-authoring one.
    """
    base = Path(routes_dir) if routes_dir is not None else ROUTES_DIR
    files = [
        p
        for p in base.iterdir()
        if p.is_file() and p.suffix == ".py" and p.name != _SELF_NAME
    ]
    return sorted(files, key=lambda p: p.name)


def _module_name(path: Path) -> str:
    """
    `echobot.api.<stem>` for the shipped folder so relative imports work.
    Other folders get their own namespace so they never shadow shipped modules.
    """
    if path.parent.resolve() == ROUTES_DIR:
        return f"{__name__}.{path.stem}"
    digest = hashlib.sha1(str(path.parent.resolve()).encode("utf-8")).hexdigest()[:10]
    return f"_echobot_routes_{digest}.{path.stem}"


def _load_module(path: Path) -> ModuleType:
    """
    Execute a route file as a fresh module.

    Re-running a build re-executes the file. A failed load restores whatever
    sys.modules held under that name before.
    """
    mod_name = _module_name(path)
    spec = importlib.util.spec_from_file_location(mod_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot create import spec for {path}")

    module = importlib.util.module_from_spec(spec)
    previous = sys.modules.get(mod_name)
    sys.modules[mod_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        if previous is not None:
            sys.modules[mod_name] = previous
        else:
            sys.modules.pop(mod_name, None)
        raise
    return module


def _register_one(path: Path, router: APIRouter, context: Mapping[str, Any]) -> bool:
    """
    Load one route file and let it register onto the shared router.

    Returns False if the module has neither shape. Exceptions propagate;
    routes added before a raise stay on the router.
    """
    module = _load_module(path)
    value = getattr(module, EXPORT_NAME, module)

    if callable(value):
        value(router, context)
        return True

    reg = getattr(value, "register", None)
    if callable(reg):
        reg(router, context)
        return True

    return False


def build_api_router(
    context: Optional[Mapping[str, Any]] = None,
    *,
    routes_dir: Union[str, Path, None] = None,
) -> APIRouter:
    """
    Build the shared API router from every route module in the routes folder.

    Each module must export either:
        def register(router, context) -> None      (module-level, the usual form)
        routes = <callable (router, context)>       (or an object with .register)

    Rules:
    - Modules are attempted independently, in file-name order.
    - Wrong shape => warning, skipped.
    - Load/register raises => error (with traceback), remaining modules continue.
      Routes the module added before raising are kept.
    - Always returns a router, even if nothing registered.

    `context` is handed to modules as a read-only view, e.g. {"client": bot}.
    """
    ctx: Mapping[str, Any] = MappingProxyType(dict(context or {}))
    router = APIRouter()
    files = {p.name: p for p in discover_route_files(routes_dir)}

    register_each(
        "api route module",
        files,
        lambda name: _register_one(files[name], router, ctx),
        logger,
    )
    return router
