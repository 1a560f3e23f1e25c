"""Experiment configuration files and the hyperparameter search space built from them."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from os import PathLike

from .definitions import SchedulerOption, SchedulerType

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _parse_int(token: str) -> int:
    match = _INT_PREFIX.match(token)
    if match is None:
        raise ValueError(f"not an integer: {token!r}")
    return int(match.group(1))


def _parse_float(token: str) -> float:
    match = _FLOAT_PREFIX.match(token)
    if match is None:
        raise ValueError(f"not a number: {token!r}")
    return float(match.group(1))


def _parse_bool(token: str) -> bool:
    return token == "true"


def _split_values(line: str, size: int) -> list[str]:
    tokens = line.split(",")[:size]
    return tokens + [""] * (size - len(tokens))


@dataclass(frozen=True)
class ExperimentConfig:
    """Thread count, hyperparameter values and enabled schedulers for an experiment run."""

    thread_total: int = 4
    alpha: tuple[float, float, float] = (0.13889, 0.83889, 0.1)
    beta: tuple[float, float, float] = (70.0, 95.0, 5.0)
    d: tuple[int, int, int] = (100000, 1000000, 100000)
    w: tuple[int, int, int] = (20, 100, 10)
    schedulers: tuple[bool, bool, bool, bool] = (True, False, False, False)

    def search_space(self) -> list[SchedulerOption]:
        """Every option combination for the enabled schedulers."""
        enabled = [SchedulerType(i) for i, on in enumerate(self.schedulers) if on]
        return build_search_space(enabled, self.alpha, self.beta, self.d, self.w)


def parse_config(lines: Iterable[str]) -> ExperimentConfig:
    """Read a configuration from its lines.

    Line 1 holds the thread count, lines 2 to 5 three comma-separated values
    each for alpha, beta, d and w, line 6 four true/false scheduler flags.
    Missing lines keep their defaults; extra lines are logged and ignored.
    """
    defaults = ExperimentConfig()
    values: dict[str, object] = {}
    for line_num, raw in enumerate(lines):
        line = raw.rstrip("\r\n")
        if line_num == 0:
            match = _INT_PREFIX.match(line)
            values["thread_total"] = int(match.group(1)) if match else 0
        elif line_num == 1:
            values["alpha"] = tuple(_parse_float(t) for t in _split_values(line, 3))
        elif line_num == 2:
            values["beta"] = tuple(_parse_float(t) for t in _split_values(line, 3))
        elif line_num == 3:
            values["d"] = tuple(_parse_int(t) for t in _split_values(line, 3))
        elif line_num == 4:
            values["w"] = tuple(_parse_int(t) for t in _split_values(line, 3))
        elif line_num == 5:
            values["schedulers"] = tuple(_parse_bool(t) for t in _split_values(line, 4))
        else:
            logger.warning("Unexpected line in config file: %s", line)
    return ExperimentConfig(
        thread_total=values.get("thread_total", defaults.thread_total),  # type: ignore[arg-type]
        alpha=values.get("alpha", defaults.alpha),  # type: ignore[arg-type]
        beta=values.get("beta", defaults.beta),  # type: ignore[arg-type]
        d=values.get("d", defaults.d),  # type: ignore[arg-type]
        w=values.get("w", defaults.w),  # type: ignore[arg-type]
        schedulers=values.get("schedulers", defaults.schedulers),  # type: ignore[arg-type]
    )


def load_config(path: str | PathLike[str]) -> ExperimentConfig:
    """Read a configuration file; raises OSError if it cannot be opened."""
    with open(path, encoding="utf-8") as handle:
        return parse_config(handle)


def build_search_space(
    schedulers: Iterable[SchedulerType],
    alphas: Sequence[float],
    betas: Sequence[float],
    ds: Sequence[int],
    ws: Sequence[int],
) -> list[SchedulerOption]:
    """Build all option combinations in four phases.

    Plain options first, then starvation prevention over alpha and beta, then
    preemption over d and w, then both together; each phase goes over every
    scheduler in turn.
    """
    schedulers = [SchedulerType(s) for s in schedulers]
    base = dict(working_till_end=True, scheduling_with_flavor_option=False)
    space: list[SchedulerOption] = []

    space.extend(
        SchedulerOption(
            scheduler_index=s,
            prevent_starvation=False,
            svp_upper=0.0,
            age_weight=0.0,
            using_preemption=False,
            reorder_count=0,
            preemption_task_window=0,
            **base,
        )
        for s in schedulers
    )
    space.extend(
        SchedulerOption(
            scheduler_index=s,
            prevent_starvation=True,
            svp_upper=beta,
            age_weight=alpha,
            using_preemption=False,
            reorder_count=0,
            preemption_task_window=0,
            **base,
        )
        for s in schedulers
        for alpha in alphas
        for beta in betas
    )
    space.extend(
        SchedulerOption(
            scheduler_index=s,
            prevent_starvation=False,
            svp_upper=0.0,
            age_weight=0.0,
            using_preemption=True,
            reorder_count=d,
            preemption_task_window=w,
            **base,
        )
        for s in schedulers
        for d in ds
        for w in ws
    )
    space.extend(
        SchedulerOption(
            scheduler_index=s,
            prevent_starvation=True,
            svp_upper=beta,
            age_weight=alpha,
            using_preemption=True,
            reorder_count=d,
            preemption_task_window=w,
            **base,
        )
        for s in schedulers
        for alpha in alphas
        for beta in betas
        for d in ds
        for w in ws
    )
    return space