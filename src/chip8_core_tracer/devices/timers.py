# chip8_core_tracer/devices/timers.py
"""
遅延タイマー(DT)とサウンドタイマー(ST)を60Hzで減算するタイマーサブシステム。

命令の実行速度とは独立したスレッドで動作し、命令サイクルと同じ一時停止ゲートを通過します。
"""
import logging
import threading
from typing import Callable, Optional

from chip8_core_tracer.core.pause import PauseGate
from chip8_core_tracer.common.types import BeepHandler

logger = logging.getLogger(__name__)

TIMER_HZ = 60

# @intent:responsibility DT/STを一定周期で0に向けて減算し、STが0になった時点でブザー停止を通知します。
class TimerSubsystem:
    """
    state_source は dt/st 属性を持つ現在のマシン状態を返す呼び出し可能オブジェクトです。
    CPUのリセットで状態オブジェクトが差し替わっても追従できるよう、参照ではなく関数で受け取ります。
    """
    def __init__(self, gate: PauseGate, state_source: Callable[[], object],
                 beep: Optional[BeepHandler] = None, hz: float = TIMER_HZ):
        if hz <= 0:
            raise ValueError(f"Timer frequency must be positive: {hz}")
        self._gate = gate
        self._state_source = state_source
        self._beep = beep
        self.period = 1.0 / hz
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    def set_beep_handler(self, beep: Optional[BeepHandler]) -> None:
        self._beep = beep

    def tick(self, timeout: Optional[float] = None) -> bool:
        """
        1ティック分の減算を行います。
        一時停止中は再開まで待機し、timeout 秒以内に再開されなければ何も変更せず False を返します。
        """
        with self._gate.hold(timeout) as proceed:
            if not proceed:
                return False
            state = self._state_source()
            if state.st > 0:
                state.st -= 1
                if state.st == 0 and self._beep is not None:
                    self._beep(False)
            if state.dt > 0:
                state.dt -= 1
            return True

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # @intent:responsibility バックグラウンドスレッドでティックループを開始します。既に動作中なら何もしません。
    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="chip8-timers")
        self._thread.start()
        logger.debug("Timer subsystem started at %.1f Hz", 1.0 / self.period)

    # @intent:responsibility ティックループに停止を通知し、スレッドの終了を待ちます。
    def stop(self) -> None:
        self._stop_event.set()
        self._gate.notify()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None
            logger.debug("Timer subsystem stopped")

    def _run(self) -> None:
        while not self._stop_event.is_set():
            # 一時停止中も停止要求を観測できるよう、ゲート待ちは1周期で打ち切る
            self.tick(timeout=self.period)
            self._stop_event.wait(self.period)
