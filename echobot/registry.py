from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable

REGISTERED = "registered"
MALFORMED = "malformed"

__all__ = ["REGISTERED", "MALFORMED", "register_each"]


def register_each(
    kind: str,
    names: Iterable[str],
    attempt: Callable[[str], bool],
    log: logging.Logger,
) -> Dict[str, str]:
    """
    Run `attempt(name)` for every name, isolating each one.

    attempt returns True when the module registered, False when it has no
    usable registration entry point (logged as a warning), and may raise
    (logged as an error with traceback). Nothing escapes; the per-name
    outcome is returned in input order and summarized at INFO.
    """
    results: Dict[str, str] = {}

    for name in names:
        try:
            ok = attempt(name)
        except Exception as e:
            log.error("%s %s failed to load/register: %s", kind, name, e, exc_info=True)
            results[name] = f"failed ({e})"
            continue

        if not ok:
            log.warning("%s %s is missing an exported function or register()", kind, name)
            results[name] = MALFORMED
            continue

        results[name] = REGISTERED

    summary = ", ".join(f"{k}={v}" for k, v in results.items()) or "(none)"
    log.info("%s registration summary: %s", kind, summary)
    return results
