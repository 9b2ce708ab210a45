"""テスト実行時にsrcをパスへ追加し、共通の合成信号を提供する。"""

import sys
from pathlib import Path

import numpy as np
import pytest


def pytest_configure() -> None:
    """srcディレクトリをimportパスに追加する。"""
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


SPIKE_BACKGROUND = 10.0
SPIKE_HEIGHT = 100.0
SPIKE_INDEX = 100


@pytest.fixture
def spike_signal() -> np.ndarray:
    """平坦なバックグラウンド上の細いガウスピーク（200点）。"""
    idx = np.arange(200, dtype=float)
    return SPIKE_BACKGROUND + SPIKE_HEIGHT * np.exp(-0.5 * ((idx - SPIKE_INDEX) / 2.0) ** 2)


@pytest.fixture
def drifting_signal(spike_signal: np.ndarray) -> np.ndarray:
    """ピーク信号にゆるやかなドリフトを加えたもの。"""
    idx = np.arange(spike_signal.size, dtype=float)
    return spike_signal + 3.0 * np.sin(2.0 * np.pi * idx / 400.0) + 0.01 * idx
