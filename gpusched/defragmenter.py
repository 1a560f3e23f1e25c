"""Rearranging preemptible jobs across servers so that more servers become fully free."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Protocol

from .definitions import (
    ACCELERATOR_PER_SERVER_MAX,
    DP_EXECUTION_MAXIMUM,
    DefragmentationMethod,
    GpuAllocationType,
)

logger = logging.getLogger(__name__)


class AcceleratorJob(Protocol):
    """A job occupying accelerators on one server."""

    @property
    def job_id(self) -> str: ...

    @property
    def accelerator_count(self) -> int: ...

    @property
    def preemptible(self) -> bool: ...


class GpuServer(Protocol):
    """A server whose accelerator slots can be reserved by jobs."""

    @property
    def accelerator_count(self) -> int: ...

    @property
    def available_count(self) -> int: ...

    @property
    def reserved(self) -> Sequence[bool]: ...

    @property
    def reserved_job_ids(self) -> Sequence[str]: ...

    @property
    def jobs(self) -> Sequence[AcceleratorJob]: ...

    def remove_job(self, job: AcceleratorJob) -> None: ...

    def assign(self, job: AcceleratorJob, count: int) -> None: ...


@dataclass
class _Slot:
    status: GpuAllocationType
    job_id: str = ""


@dataclass
class _JobElement:
    job: AcceleratorJob
    server_index: int
    target_index: int = -1


class Defragmenter:
    """Searches for job moves that leave the largest number of servers completely empty."""

    def __init__(
        self,
        servers: Sequence[GpuServer],
        max_execute_number: int = DP_EXECUTION_MAXIMUM,
    ) -> None:
        self.servers = servers
        self.max_execute_number = max_execute_number
        self.method = DefragmentationMethod.MAX_SPACE
        self._status: list[list[_Slot]] | None = None
        self._jobs: list[_JobElement] = []
        self._optimal: list[_JobElement] = []
        self._target_servers: set[int] = set()
        self._prioritised: list[int] = []
        self._cache: dict[str, int] = {}
        self._best = 0
        self._execute_count = 0

    def defragment(self, step: int) -> bool:
        """Move jobs if that frees more servers; return whether anything was moved."""
        self._best = 0
        self._execute_count = 0

        self._reconstruct_status()
        self._build_targets()
        empty_servers = self._count_fully_empty()
        self._optimal = []
        expected = self._search(0)
        logger.info("%d - %d, %d", step, empty_servers, expected)
        if empty_servers < expected:
            self._apply_moves()
            return True
        return False

    def _apply_moves(self) -> None:
        for element in self._optimal:
            if element.target_index == -1:
                continue
            self.servers[element.server_index].remove_job(element.job)
            self.servers[element.target_index].assign(
                element.job, element.job.accelerator_count
            )

    def _build_targets(self) -> None:
        self._prioritised = sorted(
            self._target_servers, key=lambda i: self.servers[i].available_count
        )

    def _reconstruct_status(self) -> None:
        self._jobs = []
        self._target_servers = set()
        status: list[list[_Slot]] = []

        for index, server in enumerate(self.servers):
            empty = server.available_count
            count = server.accelerator_count

            if empty == 0 or empty == count:
                kind = GpuAllocationType.FIXED if empty == 0 else GpuAllocationType.EMPTY
                row = [_Slot(kind) for _ in range(count)]
                row += [
                    _Slot(GpuAllocationType.NONE)
                    for _ in range(ACCELERATOR_PER_SERVER_MAX - count)
                ]
                status.append(row)
                continue

            self._target_servers.add(index)
            row = []
            previous_id = ""
            job: AcceleratorJob | None = None
            for slot in range(ACCELERATOR_PER_SERVER_MAX):
                if slot > count - 1:
                    row.append(_Slot(GpuAllocationType.NONE))
                    previous_id, job = "", None
                    continue
                if not server.reserved[slot]:
                    row.append(_Slot(GpuAllocationType.EMPTY))
                    previous_id, job = "", None
                    continue

                job_id = server.reserved_job_ids[slot]
                if previous_id != job_id:
                    previous_id = job_id
                    job = _find_job(job_id, server.jobs)
                    if (
                        job.preemptible
                        and job.accelerator_count != ACCELERATOR_PER_SERVER_MAX
                    ):
                        self._jobs.append(_JobElement(job, index))
                if job is None:
                    raise LookupError(f"no job for reserved slot {slot} of server {index}")
                kind = (
                    GpuAllocationType.FLOATING if job.preemptible else GpuAllocationType.FIXED
                )
                row.append(_Slot(kind, job_id))
            status.append(row)

        self._status = status

    def _search(self, depth: int) -> int:
        if self._execute_count > self.max_execute_number:
            return self._best
        self._execute_count += 1

        key = self._state_key(depth)
        if key in self._cache:
            return self._cache[key]

        if depth == 0:
            self._cache.clear()
            self._cache[key] = self._best
            self._best = self._count_fully_empty()

        if depth == len(self._jobs):
            return self._best

        target = self._jobs[depth]
        for position, server_index in enumerate(self._prioritised):
            if target.server_index == position:
                continue
            server = self.servers[server_index]
            if server.available_count < target.job.accelerator_count:
                continue
            if self._rearrange(position, target, reverse=False):
                full = self._count_fully_empty()
                if full > self._best:
                    self._best = full
                    self._cache[key] = self._best
                    self._optimal = [replace(element) for element in self._jobs]
                self._best = self._search(depth + 1)
                self._rearrange(position, target, reverse=True)

        self._best = self._search(depth + 1)
        return self._best

    def _count_fully_empty(self) -> int:
        return sum(
            1
            for index, server in enumerate(self.servers)
            if self._empty_slots(index) == server.accelerator_count
        )

    def _empty_slots(self, server_index: int) -> int:
        if self._status is None:
            return 0
        return sum(
            1 for slot in self._status[server_index] if slot.status is GpuAllocationType.EMPTY
        )

    def _switch(
        self,
        server_index: int,
        count: int,
        before: GpuAllocationType,
        after: GpuAllocationType,
    ) -> None:
        if self._status is None:
            return
        for slot in self._status[server_index]:
            if count == 0 or slot.status is GpuAllocationType.NONE:
                break
            if slot.status is before:
                slot.status = after
                count -= 1

    def _rearrange(self, server_index: int, element: _JobElement, reverse: bool) -> bool:
        if self._status is None:
            return False
        required = element.job.accelerator_count

        if not reverse:
            if required > self.servers[server_index].accelerator_count:
                return False
            if self._empty_slots(server_index) < required:
                return False
            self._switch(
                server_index, required, GpuAllocationType.EMPTY, GpuAllocationType.ADJUSTED
            )
            self._switch(
                element.server_index,
                required,
                GpuAllocationType.FLOATING,
                GpuAllocationType.EMPTY,
            )
            element.target_index = server_index
            return True

        self._switch(
            server_index, required, GpuAllocationType.ADJUSTED, GpuAllocationType.EMPTY
        )
        self._switch(
            element.server_index, required, GpuAllocationType.EMPTY, GpuAllocationType.FLOATING
        )
        element.target_index = -1
        return True

    def _state_key(self, depth: int) -> str:
        parts = "".join(
            f"{index}:{self._empty_slots(index)};" for index in self._prioritised
        )
        return f"{depth}-{parts}"


def _find_job(job_id: str, jobs: Sequence[AcceleratorJob]) -> AcceleratorJob:
    for job in jobs:
        if job.job_id == job_id:
            return job
    raise LookupError(f"job {job_id!r} is not assigned to this server")