# chip8_core_tracer/core/pause.py
"""
Core Layer (一時停止ゲート)

命令サイクルの駆動スレッドとタイマースレッドが共有する、
粗粒度ロック兼一時停止ゲートを提供します。
"""
import threading
import time
from contextlib import contextmanager
from typing import Iterator, Optional

# @intent:responsibility マシン状態を守るロックと、一時停止フラグを一体で管理します。
# @intent:rationale engage() 自身がロックを取得するため、engage() から戻った時点で
#                  実行中のサイクル/ティックは完了しており、以降の処理は必ずフラグを観測します。
class PauseGate:
    """
    サイクル駆動とタイマーティックの両方が通過するゲート。

    `hold()` はロックを取得し、ゲートが閉じている間は待機してから処理を許可します。
    `wait()` はロックを一時的に手放して待機するため、キー入力待ちのような
    長時間の命令中でも他方のアクティビティは進行できます。
    """
    def __init__(self):
        self._condition = threading.Condition(threading.RLock())
        self._engaged = False

    @property
    def engaged(self) -> bool:
        return self._engaged

    # @intent:responsibility ゲートを閉じます。既に閉じている場合は何もしません。
    def engage(self) -> None:
        with self._condition:
            self._engaged = True

    # @intent:responsibility ゲートを開き、待機中の全アクティビティを起こします。開いている場合は何もしません。
    def release(self) -> None:
        with self._condition:
            if not self._engaged:
                return
            self._engaged = False
            self._condition.notify_all()

    # @intent:responsibility ロックのみを取得します（一時停止中でも読み取りを許可する診断用）。
    @contextmanager
    def locked(self) -> Iterator[None]:
        with self._condition:
            yield

    @contextmanager
    def hold(self, timeout: Optional[float] = None) -> Iterator[bool]:
        """
        ロックを取得し、ゲートが開くまで待機します。
        timeout 秒以内に開かなかった場合は False を渡し、呼び出し側は状態を変更してはいけません。
        """
        with self._condition:
            if timeout is None:
                while self._engaged:
                    self._condition.wait()
                yield True
                return
            deadline = time.monotonic() + timeout
            while self._engaged:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self._condition.wait(remaining)
            yield not self._engaged

    # @intent:responsibility ロック保持中に呼び出し、ロックを手放して最大 interval 秒待機します。
    def wait(self, interval: float) -> None:
        self._condition.wait(interval)

    # @intent:responsibility 待機中のスレッドを起こします（キー入力や停止要求の通知用）。
    def notify(self) -> None:
        with self._condition:
            self._condition.notify_all()
