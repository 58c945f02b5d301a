from __future__ import annotations

import os
from dataclasses import dataclass

from .models import OptionsDefaulting


@dataclass
class BridgeConfig:
    backend: str = ""
    options_defaulting: OptionsDefaulting = OptionsDefaulting.ALL_OR_NOTHING
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "BridgeConfig":
        return cls(
            backend=os.getenv("ANNOTATOR_BACKEND", ""),
            options_defaulting=OptionsDefaulting(
                os.getenv("ANNOTATOR_OPTIONS_DEFAULTING", OptionsDefaulting.ALL_OR_NOTHING.value).lower()
            ),
            log_level=os.getenv("ANNOTATOR_LOG_LEVEL", "INFO").upper(),
        )
