"""Tests for the window load-event registration validator."""

import pytest

from jsprobe.models import LoadEventVerdict
from jsprobe.onload_validator import call_arguments, detect_load_registration, onload_validator
from jsprobe.walker import walk_ancestors


class TestAddEventListener:
    """Test window.addEventListener(...) registrations."""

    def test_handler_passed_by_reference(self, parse_js):
        verdict = detect_load_registration(parse_js("window.addEventListener('load', init);"))
        assert verdict.registered is True
        assert verdict.misuse is False
        assert verdict.passed

    def test_handler_called_instead_of_passed(self, parse_js):
        verdict = detect_load_registration(parse_js("window.addEventListener('load', init());"))
        assert verdict.registered is True
        assert verdict.misuse is True
        assert not verdict.passed

    def test_dom_content_loaded(self, parse_js):
        source = 'window.addEventListener("DOMContentLoaded", () => start());'
        verdict = detect_load_registration(parse_js(source))
        assert verdict.registered is True
        assert verdict.misuse is False

    def test_other_events_do_not_register(self, parse_js):
        verdict = detect_load_registration(parse_js("window.addEventListener('click', onClick);"))
        assert verdict.as_dict() == {"registered": False, "misuse": False}

    def test_misuse_requires_a_load_registration(self, parse_js):
        verdict = detect_load_registration(parse_js("window.addEventListener('resize', layout());"))
        assert verdict.misuse is False

    @pytest.mark.parametrize("source", [
        "window.addEventListener('load');",
        "window.addEventListener('load', init, false);",
        "window.addEventListener(eventName, init);",
        "document.addEventListener('load', init);",
        "const add = window.addEventListener;",
    ])
    def test_non_matching_shapes(self, parse_js, source):
        assert detect_load_registration(parse_js(source)).registered is False

    def test_comments_are_not_arguments(self, parse_js):
        verdict = detect_load_registration(parse_js("window.addEventListener('load', /* go */ init);"))
        assert verdict.registered is True

    def test_escaped_event_name(self, parse_js):
        verdict = detect_load_registration(parse_js(r"window.addEventListener('lo\x61d', init);"))
        assert verdict.registered is True

    def test_custom_event_names(self, parse_js):
        root = parse_js("window.addEventListener('pageshow', init);")
        assert detect_load_registration(root).registered is False
        assert detect_load_registration(root, events=["pageshow"]).registered is True


class TestOnloadAssignment:
    """Test window.onload = ... registrations."""

    def test_handler_assigned(self, parse_js):
        verdict = detect_load_registration(parse_js("window.onload = handleLoad;"))
        assert verdict.registered is True
        assert verdict.misuse is False

    def test_call_result_assigned(self, parse_js):
        verdict = detect_load_registration(parse_js("window.onload = handleLoad();"))
        assert verdict.registered is True
        assert verdict.misuse is True

    def test_function_expression_assigned(self, parse_js):
        verdict = detect_load_registration(parse_js("window.onload = function () { start(); };"))
        assert verdict.registered is True
        assert verdict.misuse is False

    def test_read_without_assignment(self, parse_js):
        verdict = detect_load_registration(parse_js("if (window.onload) { run(); }"))
        assert verdict.registered is False

    def test_computed_property_is_ignored(self, parse_js):
        verdict = detect_load_registration(parse_js("window['onload'] = handleLoad;"))
        assert verdict.registered is False


def test_findings_are_never_retracted(parse_js):
    """A later correct registration does not clear an earlier misuse."""
    source = "window.onload = setup();\nwindow.addEventListener('load', init);\n"
    verdict = detect_load_registration(parse_js(source))
    assert verdict.registered is True
    assert verdict.misuse is True


def test_absent_tree_gives_default_verdict():
    verdict = detect_load_registration(None)
    assert verdict == LoadEventVerdict()


def test_visitor_accumulates_into_caller_record(parse_js):
    verdict = LoadEventVerdict()
    walk_ancestors(parse_js("window.onload = go;"), {"member_expression": onload_validator(verdict)})
    assert verdict.registered is True


def test_distinct_records_per_walk(parse_js):
    good = detect_load_registration(parse_js("window.onload = go;"))
    bad = detect_load_registration(parse_js("window.onload = go();"))
    assert good is not bad
    assert good.misuse is False
    assert bad.misuse is True


def test_deterministic(parse_js):
    root = parse_js("window.addEventListener('load', init());")
    assert detect_load_registration(root).as_dict() == detect_load_registration(root).as_dict()


def test_call_arguments_skips_comments(parse_js):
    root = parse_js("f(a, /* b */ c);")
    call = root.named_children[0].named_children[0]
    assert [arg.type for arg in call_arguments(call)] == ["identifier", "identifier"]
