import pytest

from jobshell.commands import (
    CommandError,
    parse_mask,
    parse_position,
    strip_alarm,
    strip_delay,
    strip_respawn,
)


def test_strip_respawn_removes_trailing_plus():
    assert strip_respawn(["sleep", "5", "+"]) == (["sleep", "5"], True)


def test_strip_respawn_leaves_plain_command():
    assert strip_respawn(["ls", "-l"]) == (["ls", "-l"], False)


def test_strip_respawn_only_plus():
    assert strip_respawn(["+"]) == ([], True)


def test_strip_respawn_does_not_modify_input():
    args = ["sleep", "+"]
    strip_respawn(args)
    assert args == ["sleep", "+"]


def test_strip_alarm_documented_example():
    args = ["alarm-thread", "30", "xclock", "-update", "1"]
    assert strip_alarm(args) == (["xclock", "-update", "1"], 30)


def test_strip_alarm_non_numeric_seconds_leaves_args():
    args = ["alarm-thread", "abc", "ls"]
    assert strip_alarm(args) == (args, 0)


def test_strip_alarm_without_command_leaves_args():
    args = ["alarm-thread", "5"]
    assert strip_alarm(args) == (args, 0)


def test_strip_alarm_other_command():
    args = ["ls", "5", "x"]
    assert strip_alarm(args) == (args, 0)


def test_strip_alarm_leading_digits():
    assert strip_alarm(["alarm-thread", "4s", "ls"]) == (["ls"], 4)


def test_strip_delay_returns_command_and_delay():
    assert strip_delay(["delay-thread", "5", "ls", "-a"]) == (["ls", "-a"], 5)


def test_strip_delay_zero_is_a_delay():
    assert strip_delay(["delay-thread", "0", "ls"]) == (["ls"], 0)


def test_strip_delay_negative_raises():
    with pytest.raises(CommandError):
        strip_delay(["delay-thread", "-3", "ls"])


def test_strip_delay_not_a_delay_command():
    args = ["ls", "1", "2"]
    assert strip_delay(args) == (args, None)


def test_strip_delay_missing_command():
    args = ["delay-thread", "2"]
    assert strip_delay(args) == (args, None)


def test_parse_mask_signals_and_command():
    assert parse_mask(["mask", "2", "15", "-c", "sleep", "5"]) == ([2, 15], ["sleep", "5"])


def test_parse_mask_invalid_argument():
    with pytest.raises(CommandError, match="invalid argument"):
        parse_mask(["mask", "x", "-c", "ls"])


def test_parse_mask_requires_a_signal():
    with pytest.raises(CommandError, match="at least one signal"):
        parse_mask(["mask", "-c", "ls"])


def test_parse_mask_requires_dash_c():
    with pytest.raises(CommandError, match="missing arguments"):
        parse_mask(["mask", "2"])


def test_parse_mask_requires_command():
    with pytest.raises(CommandError):
        parse_mask(["mask", "2", "-c"])


def test_parse_mask_rejects_unknown_signal_number():
    with pytest.raises(CommandError):
        parse_mask(["mask", "99999", "-c", "ls"])


def test_parse_mask_rejects_other_command():
    with pytest.raises(CommandError):
        parse_mask(["ls", "2", "-c", "ls"])


def test_parse_position_default():
    assert parse_position(["fg"]) == 1


def test_parse_position_given():
    assert parse_position(["bg", "3"]) == 3


def test_parse_position_non_numeric_is_zero():
    assert parse_position(["fg", "x"]) == 0