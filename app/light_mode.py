from __future__ import annotations

import os


def light_mode_enabled() -> bool:
    """
    Return True when the service should run without the language model.

    Light mode swaps the extractor for an offline backend (time ranges then come from
    the rule-based fallback only) and keeps query history in memory.  Defaults to True
    whenever tests are running (detected via PYTEST_CURRENT_TEST) unless explicitly
    disabled via FLIGHTQUERY_LIGHT=0/false/no.
    """
    val = os.getenv("FLIGHTQUERY_LIGHT", "").strip().lower()
    if val in ("0", "false", "no"):
        return False
    if val in ("1", "true", "yes"):
        return True
    return os.getenv("PYTEST_CURRENT_TEST") is not None
