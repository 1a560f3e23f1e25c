import logging

import pytest

from gpusched.definitions import SchedulerOption, SchedulerType
from gpusched.search_space import (
    ExperimentConfig,
    build_search_space,
    load_config,
    parse_config,
)

FULL_CONFIG = [
    "8",
    "0.5,0.25,0.125",
    "60,70,80",
    "1,2,3",
    "4,5,6",
    "false,true,false,true",
]


def test_parse_full_config():
    config = parse_config(FULL_CONFIG)
    assert config.thread_total == 8
    assert config.alpha == (0.5, 0.25, 0.125)
    assert config.beta == (60.0, 70.0, 80.0)
    assert config.d == (1, 2, 3)
    assert config.w == (4, 5, 6)
    assert config.schedulers == (False, True, False, True)


def test_parse_handles_line_endings():
    config = parse_config([line + "\r\n" for line in FULL_CONFIG])
    assert config == parse_config(FULL_CONFIG)


def test_partial_config_keeps_defaults():
    config = parse_config(["2"])
    defaults = ExperimentConfig()
    assert config.thread_total == 2
    assert config.alpha == defaults.alpha
    assert config.schedulers == defaults.schedulers


def test_non_numeric_thread_count_becomes_zero():
    assert parse_config(["many"]).thread_total == 0


def test_bad_number_raises():
    with pytest.raises(ValueError):
        parse_config(["4", "abc,1,2"])


def test_missing_value_raises():
    with pytest.raises(ValueError):
        parse_config(["4", "0.1,0.2"])


def test_missing_bool_is_false():
    config = parse_config(FULL_CONFIG[:5] + ["true,true"])
    assert config.schedulers == (True, True, False, False)


def test_extra_line_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="gpusched.search_space"):
        config = parse_config(FULL_CONFIG + ["surplus"])
    assert config == parse_config(FULL_CONFIG)
    assert "surplus" in caplog.text


def test_load_config_round_trip(tmp_path):
    path = tmp_path / "config.txt"
    path.write_text("\n".join(FULL_CONFIG) + "\n", encoding="utf-8")
    assert load_config(path) == parse_config(FULL_CONFIG)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_config(tmp_path / "absent.txt")


def test_build_search_space_single_values():
    space = build_search_space([SchedulerType.MCTS], [0.5], [90.0], [10], [5])
    common = dict(
        scheduler_index=SchedulerType.MCTS,
        working_till_end=True,
        scheduling_with_flavor_option=False,
    )
    assert space == [
        SchedulerOption(
            prevent_starvation=False, svp_upper=0.0, age_weight=0.0,
            using_preemption=False, reorder_count=0, preemption_task_window=0, **common,
        ),
        SchedulerOption(
            prevent_starvation=True, svp_upper=90.0, age_weight=0.5,
            using_preemption=False, reorder_count=0, preemption_task_window=0, **common,
        ),
        SchedulerOption(
            prevent_starvation=False, svp_upper=0.0, age_weight=0.0,
            using_preemption=True, reorder_count=10, preemption_task_window=5, **common,
        ),
        SchedulerOption(
            prevent_starvation=True, svp_upper=90.0, age_weight=0.5,
            using_preemption=True, reorder_count=10, preemption_task_window=5, **common,
        ),
    ]


def test_phases_iterate_schedulers_in_turn():
    a, b = SchedulerType.COMPACT, SchedulerType.ROUND_ROBIN
    space = build_search_space([a, b], [0.1], [70.0], [1], [2])
    assert [o.scheduler_index for o in space] == [a, b, a, b, a, b, a, b]


def test_inner_loop_order():
    space = build_search_space([SchedulerType.MOSTALLOCATED], [0.1, 0.2], [70.0, 80.0], [], [])
    starving = [(o.age_weight, o.svp_upper) for o in space if o.prevent_starvation]
    assert starving == [(0.1, 70.0), (0.1, 80.0), (0.2, 70.0), (0.2, 80.0)]


def test_no_schedulers_gives_empty_space():
    assert build_search_space([], [0.1], [70.0], [1], [2]) == []


def test_config_search_space_uses_enabled_schedulers():
    config = parse_config(FULL_CONFIG)
    space = config.search_space()
    assert {o.scheduler_index for o in space} == {SchedulerType.COMPACT, SchedulerType.MCTS}
    assert space == build_search_space(
        [SchedulerType.COMPACT, SchedulerType.MCTS],
        config.alpha, config.beta, config.d, config.w,
    )
    assert all(o.working_till_end for o in space)