"""Tests for list-envelope normalization."""

import pytest

from clients.envelope import envelope_total, normalize_envelope


RECORDS = [{"id": 1, "nome": "Ana"}, {"id": 2, "nome": "Bob"}]


class TestNormalizeEnvelope:
    """Every known envelope shape flattens to the same records."""

    @pytest.mark.parametrize(
        "raw",
        [
            RECORDS,
            {"items": RECORDS},
            {"items": [{"cliente": r, "links": [{"rel": "self"}]} for r in RECORDS]},
            {"data": RECORDS},
        ],
        ids=["bare-array", "flat-items", "wrapped-items", "data"],
    )
    def test_all_shapes_equivalent(self, raw):
        assert normalize_envelope(raw, "cliente") == RECORDS

    def test_bare_array_returned_unchanged(self):
        """A bare array is the record list itself."""
        assert normalize_envelope(RECORDS, "cliente") is RECORDS

    def test_null_wrapped_entries_dropped(self):
        raw = {"items": [{"cliente": {"id": 1}}, {"cliente": None}]}
        assert normalize_envelope(raw, "cliente") == [{"id": 1}]

    def test_missing_wrapped_value_dropped(self):
        raw = {"items": [{"job": {"id": 1}}, {"links": []}, {"job": {"id": 3}}]}
        assert normalize_envelope(raw, "job") == [{"id": 1}, {"id": 3}]

    def test_flat_items_without_wrapper_key(self):
        raw = {"items": [{"id": 1}, {"id": 2}]}
        assert normalize_envelope(raw, "cliente") == [{"id": 1}, {"id": 2}]

    def test_wrapper_key_must_match_entity(self):
        """A job-wrapped page read as clients stays as-is (no cliente key)."""
        raw = {"items": [{"job": {"id": 1}}]}
        assert normalize_envelope(raw, "cliente") == [{"job": {"id": 1}}]

    def test_data_array(self):
        assert normalize_envelope({"data": [{"id": 5}]}, "cliente") == [{"id": 5}]

    def test_items_takes_precedence_over_data(self):
        raw = {"items": [{"id": 1}], "data": [{"id": 2}]}
        assert normalize_envelope(raw, "cliente") == [{"id": 1}]

    def test_empty_items(self):
        assert normalize_envelope({"items": [], "total": 0}, "cliente") == []

    @pytest.mark.parametrize(
        "raw",
        [{"unexpected": "shape"}, {"items": "nope"}, {"data": None}, None, "text", 42],
    )
    def test_unrecognized_shapes_yield_empty(self, raw):
        assert normalize_envelope(raw, "cliente") == []

    def test_order_preserved(self):
        items = [{"cliente": {"id": i}} for i in (9, 3, 7)]
        assert [r["id"] for r in normalize_envelope({"items": items}, "cliente")] == [9, 3, 7]


class TestEnvelopeTotal:

    def test_total_field(self):
        assert envelope_total({"total": 5, "items": []}) == 5

    def test_total_items_field(self):
        assert envelope_total({"totalItems": 12, "data": []}) == 12

    def test_bare_array_counts_records(self):
        assert envelope_total(RECORDS) == 2

    def test_unknown(self):
        assert envelope_total({"items": []}) is None
        assert envelope_total("x") is None
