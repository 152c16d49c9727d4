from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv

from app.light_mode import light_mode_enabled
from core.generator.llm_loader import LLMBackend, load_backend
from storage.cache.redis_client import CacheClient
from storage.history import QueryHistory

ROOT = Path(__file__).resolve().parent.parent

FALLBACK_SERVICE_DATE = "2025-10-09"
DEFAULT_LIMIT = 100


def _load_yaml(path: Path) -> Dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


@dataclass
class AppState:
    models_cfg: Dict
    search_cfg: Dict
    cache: CacheClient
    history: QueryHistory
    light: bool
    _backend: Optional[Tuple[LLMBackend, str]] = None

    @property
    def llm_cfg(self) -> Dict:
        return self.models_cfg.get("llm", {})

    @property
    def defaults(self) -> Dict:
        return self.search_cfg.get("defaults", {})

    def backend(self) -> Tuple[LLMBackend, str]:
        """Resolve the extractor backend lazily so a missing key only fails the query."""
        if self._backend is None:
            self._backend = load_backend(self.llm_cfg, light=self.light)
        return self._backend


@lru_cache(maxsize=1)
def get_app_state() -> AppState:
    load_dotenv(ROOT / ".env")
    models_cfg = _load_yaml(ROOT / "config" / "models.yaml")
    search_cfg = _load_yaml(ROOT / "config" / "search.yaml")
    light = light_mode_enabled()

    cache_cfg = search_cfg.get("cache", {})
    cache = CacheClient(os.getenv("REDIS_URL"), default_ttl=cache_cfg.get("ttl_seconds"))

    history_cfg = search_cfg.get("history", {})
    history_path = None
    if not light and history_cfg.get("path"):
        history_path = ROOT / history_cfg["path"]
    history = QueryHistory(history_path, max_records=history_cfg.get("max_records", 500))
    return AppState(
        models_cfg=models_cfg,
        search_cfg=search_cfg,
        cache=cache,
        history=history,
        light=light,
    )


def get_search_cfg() -> Dict:
    return get_app_state().search_cfg


def get_history() -> QueryHistory:
    return get_app_state().history


def get_cache() -> CacheClient:
    return get_app_state().cache
