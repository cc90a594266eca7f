"""Configuration helpers for the sequence engines."""

from __future__ import annotations

import copy
from dataclasses import dataclass


@dataclass
class SequenceConfig:
    base_scan_length: int = 1000
    subword_progress_interval: int = 1_000_000
    sweep_progress_interval: int = 200
    default_family: str = "quadratic"


_SEQUENCE_CONFIG = SequenceConfig()


def get_sequence_config() -> SequenceConfig:
    return copy.deepcopy(_SEQUENCE_CONFIG)


def set_sequence_config(config: SequenceConfig) -> None:
    global _SEQUENCE_CONFIG
    _SEQUENCE_CONFIG = copy.deepcopy(config)
