# pipeline/traversal.py — bidirectional multi-sweep frame schedule
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List


@dataclass(frozen=True)
class Visit:
    index: int        # frame index
    sweep: int        # 0-based sweep number
    warm_up: bool = False


class TraversalSchedule:
    """
    프레임 0..F-1 을 P번 왕복(ping-pong) 순회하는 상태머신.

    - 첫 방문(frame 0)은 warm-up
    - 경계 프레임은 반전 시 다시 방문하지 않는다 (0,1,2,3,2,1,0,1,...)
    - 마지막 sweep이 끝 경계에 도달하면 종료
    총 방문 수 = 1 + (F - 1) * sweeps
    """
    def __init__(self, num_frames: int, p: int):
        if num_frames < 1:
            raise ValueError("num_frames must be >= 1")
        if p < 1:
            raise ValueError("p must be >= 1")
        self.num_frames = int(num_frames)
        self.p = int(p)

    @property
    def passes(self) -> int:
        return (self.p + 1) // 2

    @property
    def sweeps(self) -> int:
        # pass 하나 = 정방향 + 역방향, 마지막 pass는 정방향만
        return 2 * self.passes - 1

    def __len__(self) -> int:
        return 1 + (self.num_frames - 1) * self.sweeps

    def __iter__(self) -> Iterator[Visit]:
        position = 0
        direction = 1
        yield Visit(index=position, sweep=0, warm_up=True)

        for sweep in range(self.sweeps):
            for _ in range(self.num_frames - 1):
                position += direction
                yield Visit(index=position, sweep=sweep)
            direction = -direction

    def indices(self) -> List[int]:
        return [v.index for v in self]
