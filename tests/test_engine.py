"""Tests del motor StatsRatesCalculator.

Tests:
1. Ciclo de vida anterior/actual
2. Determinismo del recálculo
3. Orden de las métricas calculadas
4. Superficie ingest/export
"""

import logging

import pytest

from common.config import Settings
from stats_engine.calculators import DifferenceCalculator, RateCalculator
from stats_engine.engine import StatsRatesCalculator, compute_calculated_stats
from stats_engine.registry import CalculatorRegistry


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def engine(settings) -> StatsRatesCalculator:
    return StatsRatesCalculator(settings=settings)


@pytest.fixture
def first_records(make_record):
    return [
        make_record("OT01", "outbound-rtp", 1000.0, ["bytesSent", 1000, "packetsSent", 10, "codecId", "C1"]),
        make_record("C1", "codec", 1000.0, ["mimeType", "video/VP8", "payloadType", 96]),
        make_record("T1", "track", 1000.0, ["framesReceived", 30, "framesDecoded", 28]),
    ]


@pytest.fixture
def second_records(make_record):
    return [
        make_record("OT01", "outbound-rtp", 2000.0, ["bytesSent", "3000", "packetsSent", 30, "codecId", "C1"]),
        make_record("C1", "codec", 2000.0, ["mimeType", "video/VP8", "payloadType", 96]),
        make_record("T1", "track", 2000.0, ["framesReceived", 60, "framesDecoded", 57]),
        {"id": "broken", "type": "track"},
    ]


def _values(records, stats_id):
    for record in records:
        if record["id"] == stats_id:
            return record["stats"]["values"]
    raise AssertionError(f"record {stats_id} not exported")


# =============================================================================
# CICLO DE VIDA
# =============================================================================

class TestLifecycle:
    def test_initial_state(self, engine):
        assert engine.previous_report is None
        assert engine.current_report is None
        assert engine.export() == []

    def test_reports_shift(self, engine, first_records, second_records):
        first = engine.ingest(first_records)
        second = engine.ingest(second_records)

        assert engine.previous_report is first
        assert engine.current_report is second

    def test_first_report_has_undefined_rates(self, engine, first_records):
        report = engine.ingest(first_records)

        (rate,) = report.get_calculated_metrics("OT01", "bytesSent")
        assert rate.name == "[bytesSent/s]"
        assert rate.value is None

        difference = report.get_calculated_metrics("T1", "framesReceived")[1]
        assert difference.value == 2

    def test_previous_store_is_not_revised(self, engine, first_records, second_records):
        first = engine.ingest(first_records)
        engine.ingest(second_records)

        assert first.get_calculated_metrics("OT01", "bytesSent")[0].value is None

    def test_rates_on_second_report(self, engine, first_records, second_records):
        engine.ingest(first_records)
        report = engine.ingest(second_records)

        assert report.get_calculated_metrics("OT01", "bytesSent")[0].value == 2000
        assert report.get_calculated_metrics("OT01", "packetsSent")[0].value == 20
        assert report.get_calculated_metrics("OT01", "codecId")[0].value == "VP8 (payloadType: 96)"
        assert [m.value for m in report.get_calculated_metrics("T1", "framesReceived")] == [30, 3]

    def test_unregistered_types_get_no_metrics(self, engine, first_records):
        report = engine.ingest(first_records)

        assert report.get_calculated_stats("C1") is None

    def test_same_report_twice_keeps_store(self, engine, first_records, caplog):
        report = engine.ingest(first_records)

        with caplog.at_level(logging.WARNING):
            engine.add_stats_report(report)

        assert "REPORT_ALREADY_CALCULATED" in caplog.text
        assert report.get_calculated_metrics("OT01", "bytesSent")[0].value is None

    def test_stats_counters(self, engine, first_records, second_records):
        engine.ingest(first_records)
        engine.ingest(second_records)

        stats = engine.stats.to_dict()
        assert stats["reports_ingested"] == 2
        assert stats["records_received"] == 7
        assert stats["records_skipped"] == 1
        assert stats["metrics_calculated"] > stats["metrics_undefined"] > 0


# =============================================================================
# DETERMINISMO Y ORDEN
# =============================================================================

class TestDeterminism:
    def test_recomputation_is_identical(self, make_report):
        previous = make_report([("T1", "track", 1.0, {"framesReceived": 30, "framesDecoded": 28})])
        current = make_report([("T1", "track", 2.0, {"framesReceived": 60, "framesDecoded": 57})])

        first = compute_calculated_stats(previous, current)
        second = compute_calculated_stats(previous, current)

        assert {k: v.to_dict() for k, v in first.items()} == {k: v.to_dict() for k, v in second.items()}
        assert current.is_calculated is False

    def test_registration_order_independent_of_entity_order(self, make_report):
        registry = CalculatorRegistry({
            "custom": {
                "a": [DifferenceCalculator("a", "b"), RateCalculator("a", "timestamp")],
            }
        })
        previous = make_report([
            ("X", "custom", 1.0, {"a": 1, "b": 0}),
            ("Y", "custom", 1.0, {"a": 1, "b": 0}),
        ])
        current = make_report([
            ("Y", "custom", 2.0, {"a": 5, "b": 1}),
            ("X", "custom", 2.0, {"a": 3, "b": 1}),
        ])

        calculated = compute_calculated_stats(previous, current, registry)

        assert list(calculated.keys()) == ["Y", "X"]
        for stats_id in ("X", "Y"):
            names = [m.name for m in calculated[stats_id].get_calculated_metrics("a")]
            assert names == ["[a-b]", "[a/s]"]
        assert [m.value for m in calculated["X"].get_calculated_metrics("a")] == [2, 2]

    def test_custom_registry_in_engine(self, settings, make_report):
        registry = CalculatorRegistry({"custom": {"a": RateCalculator("a", "timestamp")}})
        engine = StatsRatesCalculator(registry=registry, settings=settings)
        engine.add_stats_report(make_report([("X", "custom", 1.0, {"a": 0})]))
        engine.add_stats_report(make_report([("X", "custom", 3.0, {"a": 10})]))

        assert engine.registry is registry
        assert engine.current_report.get_calculated_metrics("X", "a")[0].value == 5


# =============================================================================
# INGEST / EXPORT
# =============================================================================

class TestIngestExport:
    def test_export_interleaves_calculated_metrics(self, engine, first_records, second_records):
        engine.ingest(first_records)
        engine.ingest(second_records)

        records = engine.export()

        assert [r["id"] for r in records] == ["OT01", "C1", "T1"]
        assert _values(records, "OT01") == [
            "bytesSent", "3000", "[bytesSent/s]", 2000.0,
            "packetsSent", 30, "[packetsSent/s]", 20.0,
            "codecId", "C1", "[codec]", "VP8 (payloadType: 96)",
        ]
        assert _values(records, "T1") == [
            "framesReceived", 60, "[framesReceived/s]", 30.0, "[framesReceived-framesDecoded]", 3.0,
            "framesDecoded", 57,
        ]

    def test_export_first_report_uses_zero_for_undefined(self, engine, first_records):
        engine.ingest(first_records)

        values = _values(engine.export(), "OT01")

        assert values[:4] == ["bytesSent", 1000, "[bytesSent/s]", 0]

    def test_export_with_configured_placeholder(self, settings, first_records):
        custom = Settings(
            log_level=settings.log_level,
            log_format=settings.log_format,
            undefined_export_value=-1,
        )
        engine = StatsRatesCalculator(settings=custom)
        engine.ingest(first_records)

        assert _values(engine.export(), "OT01")[3] == -1

    def test_ingest_empty_list(self, engine):
        report = engine.ingest([])

        assert len(report) == 0
        assert engine.export() == []
