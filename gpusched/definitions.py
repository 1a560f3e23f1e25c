"""Enumerations, constants and the scheduler option record shared by the package."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

ACCELERATOR_CATEGORY_COUNT = 8
ACCELERATOR_PER_SERVER_MAX = 8
ACCELERATOR_COUNTS = 7
STARVATION_UPPER = 80.0
AGE_WEIGHT = 0.13889
DP_EXECUTION_MAXIMUM = 100000
DEFRAGMENTATION_CRITERIA = 20
STATISTICS_ARRAY_SIZE = 8


class AcceleratorType(IntEnum):
    """Kind of accelerator installed in a server."""

    ANY = -2
    CPU = -1
    V100 = 0
    A30 = 1
    A100 = 2
    H100 = 3
    H200 = 4
    L4 = 5
    L40 = 6
    B200 = 7


class SchedulerType(IntEnum):
    """Scheduling policy."""

    MOSTALLOCATED = 0
    COMPACT = 1
    ROUND_ROBIN = 2
    MCTS = 3
    FARE_SHARE = 4


class EmulationStatus(IntEnum):
    """Run state of an emulation."""

    STOP = 0
    PAUSE = 1
    START = 2


class DistributionType(IntEnum):
    """Statistical distribution used to generate workloads."""

    NORM = 0
    EXPON = 1
    LOGNORM = 2
    GAMMA = 3
    BETA = 4
    WEIBULL_MIN = 5
    UNIFORM = 6
    POISSON = 7
    CHI2 = 8


class GpuAllocationType(IntEnum):
    """State of a single accelerator slot during defragmentation."""

    NONE = 0
    EMPTY = 1
    FIXED = 2
    FLOATING = 3
    ADJUSTED = 4


class DefragmentationMethod(IntEnum):
    """Strategy used when rearranging jobs across servers."""

    MAX_SPACE = 0


class Statistic(IntEnum):
    """Position of a summary statistic in a statistics array."""

    MIN = 0
    MAX = 1
    AVG = 2
    SD = 3
    P_25 = 4
    MID = 5
    P_75 = 6
    P_95 = 7


@dataclass(frozen=True)
class SchedulerOption:
    """One combination of scheduler settings for a single experiment."""

    scheduler_index: SchedulerType = SchedulerType.MOSTALLOCATED
    using_preemption: bool = False
    scheduling_with_flavor_option: bool = False
    working_till_end: bool = True
    prevent_starvation: bool = False
    svp_upper: float = STARVATION_UPPER
    age_weight: float = AGE_WEIGHT
    reorder_count: int = DP_EXECUTION_MAXIMUM
    preemption_task_window: int = DEFRAGMENTATION_CRITERIA