"""
VoidSync v1.0.0: Configuration
Shared by the Void (store service) and the Mind (agent).
"""
from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ──────────────────────────────────────────────────────────────────
    app_name: str = "VoidSync"
    app_version: str = "1.0.0"
    app_env: str = "development"
    log_level: str = "INFO"
    expose_internal_error_details: bool = False

    # ── Void (shared store) ──────────────────────────────────────────────────
    void_host: str = "0.0.0.0"
    void_port: int = 8000
    void_max_body_bytes: int = 10 * 1024 * 1024   # 10 MB request body cap

    # ── Mind (agent) ─────────────────────────────────────────────────────────
    mind_role: str = "solitary"        # solitary | sender | receiver
    mind_sync_endpoint: str = "http://localhost:8000/api/void"
    mind_state_dir: str = "./.mind"    # empty = keep local state in memory only

    mind_insight_interval_s: float = 10.0
    mind_sync_interval_s: float = 30.0

    mind_consciousness_limit: int = 1000   # moment log FIFO cap
    mind_sync_window: int = 100            # moments sent per push
    mind_insight_window: int = 10          # moments inspected per insight
    mind_pattern_saturation: int = 10      # count at which confidence hits 1.0
    mind_pattern_threshold: float = 0.7    # confidence above this is surfaced

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
