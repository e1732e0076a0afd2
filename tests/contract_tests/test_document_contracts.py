"""
Document Contract Tests

AXIOM UNDER TEST:
=================
Decoded contracts are immutable, zero-valued by default, and keep the
agent's numbering exactly.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest
from hypothesis import given, strategies as st

from monit_collector.contracts.base import (
    MAX_EPOCH_SECONDS,
    MIN_EPOCH_SECONDS,
    Error,
    ErrorCode,
    Result,
    Timestamp,
    epoch_microseconds,
    epoch_seconds,
)
from monit_collector.contracts.document import (
    Document, Event, GenericService, ServiceGroup, ServiceKind,
)


class TestServiceKind:

    def test_numbering_is_exact(self):
        assert {k.name: k.value for k in ServiceKind} == {
            'FILESYSTEM': 0,
            'DIRECTORY': 1,
            'FILE': 2,
            'PROCESS': 3,
            'SYSTEM': 5,
            'FIFO': 6,
            'PROGRAM': 7,
            'NET': 8,
        }

    def test_four_is_not_a_kind(self):
        with pytest.raises(ValueError):
            ServiceKind(4)
        assert ServiceKind.describe(4) == "Unknown(4)"

    def test_generic_service_exposes_declared_kind(self):
        assert GenericService(kind=6).service_kind is ServiceKind.FIFO
        assert GenericService(kind=9).service_kind is None


class TestZeroValues:

    def test_empty_document(self):
        document = Document()
        assert document.services == ()
        assert document.service_groups == ()
        assert document.event == Event()
        assert not document.has_event

    def test_contracts_are_frozen(self):
        with pytest.raises(FrozenInstanceError):
            Document().id = "modified"
        with pytest.raises(FrozenInstanceError):
            GenericService().pid = 1

    def test_group_membership_is_ordered_pairs(self):
        document = Document(service_groups=(
            ServiceGroup(name="www", service="nginx"),
            ServiceGroup(name="db", service="postgres"),
            ServiceGroup(name="www", service="php-fpm"),
        ))
        assert document.group_members("www") == ("nginx", "php-fpm")
        assert document.group_members("none") == ()

    def test_services_of_kind_keeps_document_order(self):
        document = Document(services=(
            GenericService(name="a", kind=ServiceKind.PROCESS),
            GenericService(name="b", kind=ServiceKind.FILE),
            GenericService(name="c", kind=ServiceKind.PROCESS),
        ))
        names = [s.name for s in document.services_of(ServiceKind.PROCESS)]
        assert names == ["a", "c"]


class TestTimestampComposition:

    def test_known_value(self):
        ts = Timestamp.from_epoch(1700000000, 250000)
        assert ts.value == datetime(2023, 11, 14, 22, 13, 20, 250000, tzinfo=timezone.utc)

    @given(
        seconds=st.integers(min_value=0, max_value=2**32),
        micros=st.integers(min_value=0, max_value=999_999),
    )
    def test_epoch_is_seconds_plus_fraction(self, seconds, micros):
        ts = Timestamp.from_epoch(seconds, micros)
        assert ts.epoch == pytest.approx(seconds + micros / 1e6, abs=1e-5)

    def test_event_time_uses_same_composition(self):
        event = Event(collected_sec=10, collected_usec=500000)
        assert event.collected_at == Timestamp.from_epoch(10, 500000)
        assert event.collected_at.epoch == 10.5

    @given(seconds=st.integers(min_value=MIN_EPOCH_SECONDS, max_value=MAX_EPOCH_SECONDS))
    def test_every_accepted_second_composes(self, seconds):
        assert Timestamp.from_epoch(epoch_seconds(str(seconds)), 999_999).value.tzinfo is not None

    @pytest.mark.parametrize("text", [str(MAX_EPOCH_SECONDS + 1), str(MIN_EPOCH_SECONDS - 1)])
    def test_seconds_outside_datetime_range_rejected(self, text):
        with pytest.raises(ValueError):
            epoch_seconds(text)

    @pytest.mark.parametrize("text", ["-1", "1000000"])
    def test_microseconds_outside_fraction_rejected(self, text):
        with pytest.raises(ValueError):
            epoch_microseconds(text)

    def test_converters_zero_value(self):
        assert (epoch_seconds(), epoch_microseconds()) == (0, 0)


class TestResult:

    def test_failure_carries_no_value(self):
        error = Error.create(ErrorCode.KIND_MISMATCH, "wrong kind", actual="File")
        result = Result.failure(error)
        assert result.is_failure
        assert result.value is None
        assert result.error.get('actual') == "File"
        assert result.error.get('missing') is None

    def test_with_context_is_immutable(self):
        error = Error.create(ErrorCode.MALFORMED_PAYLOAD, "bad")
        extended = error.with_context("line", "3")
        assert error.context == ()
        assert extended.get("line") == "3"
