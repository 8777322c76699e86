"""Tests for condition rendering and dispatch."""

from ensure.condition import Condition, describe_error, fatal
from ensure.sink import RecordingSink


def test_render_format_only(capture):
    cond = Condition(capture, "expected a value but got nil", with_location=False)
    assert cond.render() == "expected a value but got nil"


def test_render_format_args(capture):
    cond = Condition(capture, 'got "%s" and %s', ("a", 2), with_location=False)
    assert cond.render() == 'got "a" and 2'


def test_render_percent_without_args(capture):
    cond = Condition(capture, "100% wrong", with_location=False)
    assert cond.render() == "100% wrong"


def test_render_extra(capture):
    cond = Condition(capture, "boom", extra=("baz", 43), with_location=False)
    assert cond.render() == "boom\n(str) (len=3) 'baz'\n(int) 43"


def test_render_extra_without_format(capture):
    cond = Condition(capture, extra=(1,), with_location=False)
    assert cond.render() == "\n(int) 1"


def test_fatal_dispatches_once(capture):
    fatal(Condition(capture, "boom"))
    assert capture.messages == ["boom"]
    assert capture.helper_marks == 1


def test_fatal_blames_caller_of_predicate():
    def predicate(sink):
        fatal(Condition(sink, "boom"))

    def test_like():
        sink = RecordingSink()
        predicate(sink)
        return sink.message

    assert test_like().startswith("test_condition.py:")


def test_describe_error_plain():
    assert describe_error(ValueError("foo")) == "foo"


def test_describe_error_empty_text_uses_type():
    assert describe_error(RuntimeError()) == "RuntimeError"


def test_describe_error_implicit_context():
    try:
        try:
            raise KeyError("k")
        except KeyError:
            raise ValueError("bad value")
    except ValueError as e:
        assert describe_error(e) == "bad value\ncaused by: KeyError: 'k'"


def test_describe_error_suppressed_context():
    try:
        try:
            raise KeyError("k")
        except KeyError:
            raise ValueError("bad value") from None
    except ValueError as e:
        assert describe_error(e) == "bad value"


def test_with_location_prefixes_render():
    def test_like():
        return Condition(RecordingSink(), "boom").render()

    assert test_like().startswith("test_condition.py:")
