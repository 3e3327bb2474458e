"""Unit tests for decoding recognition-service replies into row dicts."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from ramadan_routine.extraction.decoder import decode, strip_fences
from ramadan_routine.extraction.errors import EXCERPT_LENGTH, EmptyResponse, ExtractionError, MalformedResponse


class TestStripFences:

    def test_json_fence(self):
        assert strip_fences('```json\n[1]\n```') == "[1]"

    def test_bare_fence(self):
        assert strip_fences("```\n[1]\n```") == "[1]"

    def test_no_fence(self):
        assert strip_fences("  [1]  ") == "[1]"


class TestDecode:

    def test_fenced_array(self):
        rows = decode('```json\n[{"Time":"08:00 AM - 09:20 AM"}]\n```')
        assert rows == [{"Time": "08:00 AM - 09:20 AM"}]

    def test_bare_array(self):
        assert decode('[{"A": "1"}, {"B": "2"}]') == [{"A": "1"}, {"B": "2"}]

    def test_prose_around_array(self):
        raw = 'Here is the table:\n[{"Time": "x", "Sunday": "CSE101"}]\nLet me know if you need more.'
        assert decode(raw) == [{"Time": "x", "Sunday": "CSE101"}]

    def test_rows_object(self):
        assert decode('{"rows": [{"A": "1"}], "notes": ["ignored"]}') == [{"A": "1"}]

    def test_empty_array(self):
        assert decode("```json\n[]\n```") == []

    def test_values_coerced_to_text(self):
        assert decode('[{"Room": 404, "Note": null, "Lab": true}]') == [{"Room": "404", "Note": "", "Lab": "True"}]

    @pytest.mark.parametrize("raw", ["", "   \n\t", None])
    def test_empty_response(self, raw):
        with pytest.raises(EmptyResponse):
            decode(raw)

    def test_no_array(self):
        with pytest.raises(MalformedResponse) as exc_info:
            decode("no array here")
        assert exc_info.value.excerpt == "no array here"

    def test_brackets_out_of_order(self):
        with pytest.raises(MalformedResponse):
            decode("] nothing [")

    def test_invalid_json(self):
        with pytest.raises(MalformedResponse) as exc_info:
            decode('[{"A": "1",]')
        assert "JSON parse failed" in str(exc_info.value)
        assert exc_info.value.excerpt.startswith('[{"A"')

    def test_non_object_elements(self):
        with pytest.raises(MalformedResponse):
            decode("[1, 2, 3]")

    def test_excerpt_is_truncated(self):
        raw = "x" * 2000
        with pytest.raises(MalformedResponse) as exc_info:
            decode(raw)
        assert exc_info.value.excerpt.startswith("x" * EXCERPT_LENGTH)
        assert len(exc_info.value.excerpt) < 2000

    def test_errors_share_a_base_class(self):
        assert issubclass(EmptyResponse, ExtractionError)
        assert issubclass(MalformedResponse, ExtractionError)
