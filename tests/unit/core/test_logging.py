"""Unit tests for logging processors."""

from incapacidades.core.logging import (
    add_correlation_id,
    rename_message_field,
)


def test_correlation_id_added_when_missing():
    event = add_correlation_id(None, "info", {"event": "hello"})

    assert event["correlation_id"].startswith("cid_")


def test_bound_correlation_id_kept():
    event = add_correlation_id(None, "info", {"event": "hello", "correlation_id": "req-1"})

    assert event["correlation_id"] == "req-1"


def test_event_renamed_to_message():
    event = rename_message_field(None, "info", {"event": "hello"})

    assert event == {"message": "hello"}

