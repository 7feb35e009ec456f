from __future__ import annotations

import itertools
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

# 遅延継続（settle-correct / reset-wrong 等）の予約と取り出しを行う。
# スレッドやタイマーは使わず、呼び出し側が再描画のたびに pop_due() で期限到来分を取り出す。
# Streamlit の再実行モデルでも、テストの疑似時計でも同じように扱える。


@dataclass(order=True)
class ScheduledTask:
    due_at: float
    seq: int
    name: str = field(compare=False)
    event: Any = field(compare=False)


class DeadlineScheduler:
    """期限付きタスクの待ち行列。単一スレッド前提。"""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._tasks: list[ScheduledTask] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._clock()

    def call_later(self, delay: float, name: str, event: Any) -> ScheduledTask:  # noqa: ANN401
        """delay 秒後に event を取り出せるよう予約する。"""
        task = ScheduledTask(self._clock() + max(0.0, float(delay)), next(self._seq), name, event)
        self._tasks.append(task)
        self._tasks.sort()
        return task

    def pop_due(self, now: float | None = None) -> list[ScheduledTask]:
        """期限が到来したタスクを期限順（同時刻なら予約順）で取り出す。"""
        now_ts = self._clock() if now is None else now
        due = [t for t in self._tasks if t.due_at <= now_ts]
        if due:
            self._tasks = [t for t in self._tasks if t.due_at > now_ts]
        return due

    def next_due(self) -> float | None:
        """次の期限（時計の値）。予約が無ければ None。"""
        return self._tasks[0].due_at if self._tasks else None

    def pending(self) -> int:
        return len(self._tasks)

    def cancel_all(self) -> None:
        self._tasks.clear()
