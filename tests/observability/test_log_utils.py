import logging

from cigno.observability.log_utils import log_exception_with_context, safe_log_value


def test_mappings_should_be_summarised_by_keys():
    assert safe_log_value({"name": "x", "budget": 1}) == "dict(keys=budget,name)"


def test_sequences_should_be_summarised_by_length():
    assert safe_log_value([1, 2, 3]) == "list(3 items)"


def test_long_strings_should_be_cut():
    value = safe_log_value("a" * 20, max_length=5)

    assert value == "aaaaa... (20 chars)"


def test_exception_should_be_logged_with_context(caplog):
    logger = logging.getLogger("cigno.tests.log_utils")

    try:
        raise RuntimeError("agent timeout")
    except RuntimeError as e:
        with caplog.at_level(logging.ERROR, logger="cigno.tests.log_utils"):
            log_exception_with_context(logger, "Call failed", e, endpoint="analyze_project")

    record = caplog.records[-1]
    assert record.endpoint == "analyze_project"
    assert record.error_type == "RuntimeError"
    assert record.error_msg == "agent timeout"
    assert record.exc_info is not None
