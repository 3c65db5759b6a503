"""Tests for anomaly categories and status mapping."""

import pytest

from cloud_invoke.types import (
    ANOMALY_CATEGORIES,
    BUSY,
    CONFLICT,
    FAULT,
    FORBIDDEN,
    INCORRECT,
    NOT_FOUND,
    UNAVAILABLE,
    UNSUPPORTED,
    Anomaly,
    category_for_status,
    is_anomaly,
)


class TestAnomaly:
    def test_categories(self):
        assert len(ANOMALY_CATEGORIES) == 9
        assert NOT_FOUND == "not-found"

    def test_fault_uses_exception_message(self):
        error = RuntimeError("exploded")
        anomaly = Anomaly.fault(error)
        assert anomaly.category == FAULT
        assert anomaly.cause is error
        assert anomaly.message == "exploded"

    def test_fault_with_empty_message(self):
        assert Anomaly.fault(RuntimeError()).message is None

    def test_frozen(self):
        anomaly = Anomaly(category=BUSY)
        with pytest.raises(AttributeError):
            anomaly.category = FAULT  # type: ignore[misc]

    def test_is_anomaly(self):
        assert is_anomaly(Anomaly(category=BUSY))
        assert not is_anomaly({"category": "busy"})
        assert not is_anomaly(None)


class TestCategoryForStatus:
    @pytest.mark.parametrize(
        ("status", "category"),
        [
            (200, None),
            (204, None),
            (301, None),
            (None, None),
            (400, INCORRECT),
            (403, FORBIDDEN),
            (404, NOT_FOUND),
            (409, CONFLICT),
            (429, BUSY),
            (500, FAULT),
            (501, UNSUPPORTED),
            (503, BUSY),
            (504, UNAVAILABLE),
            (599, FAULT),
        ],
    )
    def test_mapping(self, status, category):
        assert category_for_status(status) == category
