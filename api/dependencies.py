from __future__ import annotations

from functools import lru_cache

from annotator_bridge.annotator import AnnotatorBridge, BridgeConfig


@lru_cache(maxsize=1)
def get_config() -> BridgeConfig:
    return BridgeConfig.from_env()


@lru_cache(maxsize=1)
def get_bridge() -> AnnotatorBridge:
    return AnnotatorBridge.from_config(get_config())
