from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
    # Engine
    default_key_bits: Literal[128, 192, 256] = Field(default=128)
    log_level: str = Field(default="INFO")

    # Reproducibility
    global_seed: int = Field(default=1337)

    # Evaluation
    roundtrip_vectors: int = Field(default=200, ge=1, le=100_000)
    sac_trials: int = Field(default=50, ge=1, le=10_000)

    # Paths
    project_root: str = Field(default=os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir)))
    reports_dir: str = Field(default="reports")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    return Settings(
        default_key_bits=int(os.getenv("AESLAB_DEFAULT_KEY_BITS", "128")),
        log_level=os.getenv("AESLAB_LOG_LEVEL", "INFO").upper(),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
        roundtrip_vectors=int(os.getenv("AESLAB_ROUNDTRIP_VECTORS", "200")),
        sac_trials=int(os.getenv("AESLAB_SAC_TRIALS", "50")),
        reports_dir=os.getenv("AESLAB_REPORTS_DIR", "reports"),
    )
