"""Hyperparameter ranges for an experiment run and the texts shown while it runs."""

from __future__ import annotations

from dataclasses import dataclass

from .definitions import SchedulerOption, SchedulerType
from .search_space import build_search_space


def generate_float_values(start: float, end: float, step: float) -> list[float]:
    """Values from start up to and including end, adding step each time.

    The step is added repeatedly, so rounding errors build up exactly as they
    do when stepping a floating-point counter.
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step!r}")
    values: list[float] = []
    value = float(start)
    while value <= end:
        values.append(value)
        value += step
    return values


def generate_int_values(start: int, end: int, step: int) -> list[int]:
    """Integers from start up to and including end, step apart."""
    if step <= 0:
        raise ValueError(f"step must be positive, got {step!r}")
    return list(range(start, end + 1, step))


def progress_text(done: int, total: int) -> str:
    """Completion as ' - NN.NN%' for done experiments out of total."""
    if total <= 0:
        raise ValueError(f"total must be positive, got {total!r}")
    return f" - {done / total * 100.0:.2f}%"


def _flag(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class ParameterRanges:
    """Minimum, maximum and interval of each hyperparameter, with thread count and schedulers.

    Each of alpha, beta, d and w is a (min, max, interval) triple.
    """

    thread_total: int = 10
    alpha: tuple[float, float, float] = (0.01, 2.0, 0.01)
    beta: tuple[float, float, float] = (80.0, 95.0, 5.0)
    d: tuple[int, int, int] = (100000, 500000, 100000)
    w: tuple[int, int, int] = (20, 200, 20)
    schedulers: tuple[bool, bool, bool, bool] = (True, False, False, False)
    task_file_name: str = "job_flow_total(task,flavor,single).csv"
    server_file_name: str = "server.csv"

    def alpha_values(self) -> list[float]:
        """Every alpha value in the range."""
        return generate_float_values(*self.alpha)

    def beta_values(self) -> list[float]:
        """Every beta value in the range."""
        return generate_float_values(*self.beta)

    def d_values(self) -> list[int]:
        """Every d value in the range."""
        return generate_int_values(*self.d)

    def w_values(self) -> list[int]:
        """Every w value in the range."""
        return generate_int_values(*self.w)

    def search_space(self) -> list[SchedulerOption]:
        """Every option combination over the ranges for the enabled schedulers."""
        enabled = [SchedulerType(i) for i, on in enumerate(self.schedulers) if on]
        return build_search_space(
            enabled,
            self.alpha_values(),
            self.beta_values(),
            self.d_values(),
            self.w_values(),
        )


def format_config(ranges: ParameterRanges) -> str:
    """Render the ranges as a configuration file, lines ended with CRLF."""
    alpha = ",".join(f"{v:.5f}" for v in ranges.alpha)
    beta = ",".join(f"{v:.0f}" for v in ranges.beta)
    d = ",".join(str(int(v)) for v in ranges.d)
    w = ",".join(str(int(v)) for v in ranges.w)
    schedulers = ",".join(_flag(v) for v in ranges.schedulers)
    lines = [str(int(ranges.thread_total)), alpha, beta, d, w, schedulers]
    return "".join(f"{line}\r\n" for line in lines)