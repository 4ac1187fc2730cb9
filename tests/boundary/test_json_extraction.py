"""
Test suite for recovering JSON objects from agent replies.

System role: Verification of non-raising agent reply parsing
"""

import pytest

from cigno.boundary.agents.json_extraction import extract_agent_text, extract_json_object


class TestExtractJsonObject:
    def test_clean_json_should_return_dict(self) -> None:
        assert extract_json_object('{"name": "Atlas", "budget_amount": 1000}') == {
            "name": "Atlas",
            "budget_amount": 1000,
        }

    def test_embedded_json_should_return_first_valid_object(self) -> None:
        payload = 'Here is the analysis:\n{"name": "Atlas", "tags": ["a"]}\nand {"name": "Second"} too.'

        assert extract_json_object(payload) == {"name": "Atlas", "tags": ["a"]}

    def test_should_skip_invalid_candidates(self) -> None:
        payload = 'Draft {not json} final {"ok": true}'

        assert extract_json_object(payload) == {"ok": True}

    def test_nested_objects_should_not_be_truncated(self) -> None:
        payload = 'Result: {"budget": {"amount": 5, "currency": "EUR"}} done'

        assert extract_json_object(payload) == {"budget": {"amount": 5, "currency": "EUR"}}

    @pytest.mark.parametrize("payload", ["no json here", "{broken", "", "   ", "[1, 2, 3]", None, 42])
    def test_garbage_should_return_none(self, payload) -> None:
        assert extract_json_object(payload) is None

    def test_dict_should_be_returned_as_is(self) -> None:
        value = {"name": "Atlas"}

        assert extract_json_object(value) is value


class TestExtractAgentText:
    @pytest.mark.parametrize(
        ("result", "expected"),
        [
            ({"response": "r", "output": "o"}, "r"),
            ({"response": "", "output": "o"}, "o"),
            ({"result": {"a": 1}}, {"a": 1}),
            ({"data": "d"}, "d"),
        ],
    )
    def test_should_pick_first_non_empty_key(self, result, expected) -> None:
        assert extract_agent_text(result) == expected

    def test_should_return_non_envelopes_unchanged(self) -> None:
        assert extract_agent_text("plain text") == "plain text"
        assert extract_agent_text({"other": 1}) == {"other": 1}


class TestExtractJsonObjectEdgeCases:
    def test_brace_inside_string_value_should_not_end_object(self) -> None:
        assert extract_json_object('prefix {"a": "}"} suffix') == {"a": "}"}

    def test_escaped_quote_inside_string_should_be_kept(self) -> None:
        payload = 'Reply: {"title": "The \\"{Plan}\\"", "n": 2} end'

        assert extract_json_object(payload) == {"title": 'The "{Plan}"', "n": 2}

    @pytest.mark.parametrize("payload", ["[" * 100000, "{" * 100000, '{"a": ' + "[" * 100000])
    def test_deeply_nested_input_should_return_none(self, payload) -> None:
        assert extract_json_object(payload) is None
