from datetime import datetime, timezone

import pytest

from pykeyset import InvalidCursor, ValueType, decode_cursor, encode_cursor


class TestEncodeCursor:
    def test_bare_id_without_sort_column(self):
        assert encode_cursor(7) == "7"

    def test_value_and_id(self):
        assert encode_cursor("0001", "CCCC") == "CCCC,0001"

    def test_null_value_encodes_as_sentinel(self):
        assert encode_cursor("0001", None, ordered=True) == "1,0001"
        assert (
            encode_cursor(4, None, ordered=True, value_type=ValueType.TIMESTAMP)
            == "1970-01-01T00:00:00+00:00,4"
        )

    def test_empty_string_value_is_kept(self):
        assert encode_cursor("7", "", ordered=True) == ",7"

    def test_timestamp_uses_isoformat(self):
        created = datetime(2025, 5, 9, 10, 11, 2, tzinfo=timezone.utc)
        assert encode_cursor(3, created) == "2025-05-09T10:11:02+00:00,3"

    def test_ordered_false_drops_value(self):
        assert encode_cursor(3, "CCCC", ordered=False) == "3"


class TestDecodeCursor:
    def test_value_and_id(self):
        assert decode_cursor("CCCC,00000001-0000-0003-0000-000000000003") == (
            "CCCC",
            "00000001-0000-0003-0000-000000000003",
        )

    def test_splits_at_first_separator_only(self):
        assert decode_cursor("a,b,c") == ("a", "b,c")

    def test_unordered_token_is_the_id(self):
        assert decode_cursor("42", ordered=False) == (None, "42")

    def test_empty_value_stays_empty(self):
        assert decode_cursor(",0001") == ("", "0001")

    def test_empty_string_round_trips(self):
        assert decode_cursor(encode_cursor("7", "", ordered=True)) == ("", "7")

    def test_null_round_trips_to_sentinel(self):
        assert decode_cursor(encode_cursor("7", None, ordered=True, value_type=ValueType.NUMERIC)) == ("1", "7")

    def test_missing_separator_raises(self):
        with pytest.raises(InvalidCursor, match="expected 'value,id'"):
            decode_cursor("00000001-0000-0009-0000-000000000009")

    def test_missing_id_raises(self):
        with pytest.raises(InvalidCursor, match="missing id"):
            decode_cursor("CCCC,")

    def test_empty_token_raises(self):
        with pytest.raises(InvalidCursor, match="Empty cursor"):
            decode_cursor("")

    def test_empty_token_raises_when_unordered(self):
        with pytest.raises(InvalidCursor):
            decode_cursor("", ordered=False)

    def test_invalid_cursor_is_pykeyset_error(self):
        from pykeyset import PykeysetError

        with pytest.raises(PykeysetError):
            decode_cursor("nope")
