from src.timesheet_engine.timesheet_engine.core.enums import RoundingPolicy
from src.timesheet_engine.timesheet_engine.timesheets.rounding.exact_strategy import ExactRounding
from src.timesheet_engine.timesheet_engine.timesheets.rounding.factory import RoundingStrategyFactory
from src.timesheet_engine.timesheet_engine.timesheets.rounding.increment_strategy import IncrementRounding

SHIFT_START = 8 * 60
SHIFT_END = 17 * 60


def test_factory_none_keeps_exact_minutes():
    strategy = RoundingStrategyFactory().for_policy(RoundingPolicy.NONE)

    assert isinstance(strategy, ExactRounding)
    assert strategy.round_check_in(487, shift_start=SHIFT_START) == 487
    assert strategy.round_check_out(1027, shift_end=SHIFT_END) == 1027


def test_factory_nearest_30_uses_thirty_minute_increment():
    strategy = RoundingStrategyFactory().for_policy(RoundingPolicy.NEAREST_30)

    assert isinstance(strategy, IncrementRounding)
    assert strategy.increment == 30


def test_late_check_in_rounds_up():
    strategy = IncrementRounding(15)
    assert strategy.round_check_in(8 * 60 + 7, shift_start=SHIFT_START) == 8 * 60 + 15


def test_slightly_late_check_in_still_rounds_up():
    strategy = IncrementRounding(15)

    assert strategy.round_check_in(8 * 60 + 1, shift_start=SHIFT_START) == 8 * 60 + 15
    assert strategy.round_check_in(8 * 60 + 15, shift_start=SHIFT_START) == 8 * 60 + 15


def test_early_check_in_rounds_to_nearest():
    strategy = IncrementRounding(15)
    assert strategy.round_check_in(7 * 60 + 52, shift_start=SHIFT_START) == 7 * 60 + 45


def test_early_check_in_tie_rounds_toward_shift_start():
    strategy = IncrementRounding(30)
    assert strategy.round_check_in(7 * 60 + 45, shift_start=SHIFT_START) == SHIFT_START


def test_check_out_after_shift_end_rounds_to_nearest():
    strategy = IncrementRounding(15)

    assert strategy.round_check_out(17 * 60 + 7, shift_end=SHIFT_END) == 17 * 60
    assert strategy.round_check_out(17 * 60 + 8, shift_end=SHIFT_END) == 17 * 60 + 15


def test_check_out_tie_after_shift_end_rounds_down():
    strategy = IncrementRounding(30)
    assert strategy.round_check_out(17 * 60 + 15, shift_end=SHIFT_END) == SHIFT_END


def test_early_check_out_rounds_down():
    strategy = IncrementRounding(15)
    assert strategy.round_check_out(16 * 60 + 59, shift_end=SHIFT_END) == 16 * 60 + 45
