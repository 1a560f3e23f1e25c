# gpusched

Building blocks for GPU cluster scheduling experiments:

- the shared vocabulary of accelerator types, scheduler kinds and
  per-run scheduler options (`gpusched.definitions`);
- the grid of scheduler options to try, built either from a small
  configuration file (`gpusched.search_space`) or from start/end/step
  ranges (`gpusched.experiment_setup`);
- a defragmenter that searches for moves of preemptible jobs which leave
  more servers completely free (`gpusched.defragmenter`).

The package has no third-party dependencies.

## Definitions

`gpusched.definitions` holds the enumerations `AcceleratorType`,
`SchedulerType`, `EmulationStatus`, `DistributionType`,
`GpuAllocationType`, `DefragmentationMethod` and `Statistic`, a few
constants such as `ACCELERATOR_PER_SERVER_MAX` (8) and
`DP_EXECUTION_MAXIMUM` (100000), and the frozen dataclass
`SchedulerOption`.

`SchedulerOption` holds the settings of one experiment run: the
scheduler (`scheduler_index`), `working_till_end`,
`scheduling_with_flavor_option`, starvation prevention
(`prevent_starvation`, `svp_upper`, `age_weight`) and preemption
(`using_preemption`, `reorder_count`, `preemption_task_window`).

## Search space from a configuration file

A configuration file has six lines:

```
4
0.13889,0.83889,0.1
70,95,5
100000,1000000,100000
20,100,10
true,false,false,false
```

The first line is the number of worker threads. The next four give three
values each for the age weight (alpha), the starvation upper bound
(beta), the reorder count (d) and the preemption task window (w). The
last line switches the four schedulers on or off, in the order
most-allocated, compact, round robin, MCTS; only the word `true` counts
as on. Lines that are missing keep the defaults of `ExperimentConfig`;
lines past the sixth are logged as a warning and ignored.

```python
from gpusched.search_space import load_config

config = load_config("experiment.cfg")   # OSError if the file cannot be opened
options = config.search_space()
print(config.thread_total, len(options))
```

`parse_config(lines)` does the same from any iterable of lines, and
`build_search_space(schedulers, alphas, betas, ds, ws)` builds the grid
directly from the given values. The grid always comes in four blocks,
each walked scheduler by scheduler:

1. plain runs, one per scheduler;
2. starvation prevention only, over every alpha and beta;
3. preemption only, over every d and w;
4. both together, over every alpha, beta, d and w.

```python
from gpusched.definitions import SchedulerType
from gpusched.search_space import build_search_space

grid = build_search_space([SchedulerType.COMPACT], [0.1, 0.2], [80.0], [1000], [10, 20])
print(len(grid))   # 1 + 2 + 2 + 4 = 9
```

## Search space from ranges

`ParameterRanges` describes alpha, beta, d and w each as a
`(start, end, step)` triple, together with the thread count, the four
scheduler switches and the task and server file names.
`alpha_values()`, `beta_values()`, `d_values()` and `w_values()` expand
the ranges, and `search_space()` builds the grid from them.

`generate_float_values(start, end, step)` and
`generate_int_values(start, end, step)` expand a range with the end
included; the float version adds the step repeatedly, so rounding builds
up as it does for a stepped floating-point counter. Both raise
`ValueError` for a step that is not positive.

`format_config(ranges)` renders the ranges in configuration-file form
with CRLF line endings (alpha to five decimals, beta to none), which
`parse_config` reads back. `progress_text(done, total)` gives progress as
`" - NN.NN%"` and raises `ValueError` when `total` is not positive.

```python
from gpusched.experiment_setup import ParameterRanges, format_config, progress_text

ranges = ParameterRanges(alpha=(0.1, 0.3, 0.1), d=(100, 300, 100))
options = ranges.search_space()
print(format_config(ranges))
print(progress_text(1, 4))   # " - 25.00%"
```

## Defragmentation

`Defragmenter(servers, max_execute_number=DP_EXECUTION_MAXIMUM)` works on
a sequence of server objects. Each server must provide
`accelerator_count`, `available_count`, `reserved` (one flag per slot),
`reserved_job_ids` (the job id of each slot), `jobs`, and the methods
`remove_job(job)` and `assign(job, count)`. Each job must provide
`job_id`, `accelerator_count` and `preemptible`.

`defragment(step)` looks only at servers that are partly occupied, and
considers moving the preemptible jobs on them that use fewer than eight
accelerators. It searches, bounded by `max_execute_number` steps, for the
placement that leaves the most servers fully empty. If that number beats
the current one it applies the moves through `remove_job` and `assign`
and returns `True`; otherwise it changes nothing and returns `False`. A
reserved slot whose job id is not among the server's `jobs` raises
`LookupError`.

## What the package does not do

The package builds option grids and rearranges jobs, but it does not run
experiments: it has no job emulator, no schedulers that place jobs, no
worker threads, no command-line program, and it writes no result or log
files. Server and job objects for the defragmenter are supplied by the
caller.