"""Tests for report payloads handed to document generators."""

import json

import pytest

from fuelcalc.engine.projection import ProjectionEngine
from fuelcalc.engine.result import HistoricalAverage
from fuelcalc.models.enums import TrafficType
from fuelcalc.models.projection import ProjectionInputRow
from fuelcalc.reporting.payloads import (
    consolidated_invoice_payload,
    operation_invoice_payload,
    projection_report_payload,
    to_json,
)
from tests.conftest import make_op


class TestOperationInvoice:
    def test_domestic_invoice(self, scenario_b_op):
        payload = operation_invoice_payload(scenario_b_op)
        assert payload["breakdown"]["gross_amount"] == pytest.approx(901.5)
        assert payload["breakdown"]["traffic_label"] == "Unutarnji saobraćaj"
        assert payload["exchange_rate"]["rate"] == 1.0
        assert payload["home_currency_gross"] == pytest.approx(901.5)

    def test_estimated_rate_flagged(self):
        payload = operation_invoice_payload(make_op(currency="USD"))
        assert payload["exchange_rate"]["provenance"] == "estimated"
        assert payload["exchange_rate"]["estimated"] is True

    def test_serializable(self, scenario_a_op):
        decoded = json.loads(to_json(operation_invoice_payload(scenario_a_op)))
        assert decoded["breakdown"]["traffic_type"] == "export"
        assert decoded["breakdown"]["traffic_label"] == "Izvoz"


class TestConsolidatedInvoice:
    def test_rejected_records_left_out(self):
        ops = [
            make_op(days_ago=1, quantity_kg=100, price_per_kg=1),
            make_op(days_ago=2, quantity_kg=-1),
        ]
        payload = consolidated_invoice_payload(ops, "June, Wizz Air")
        assert payload["summary"]["totals"]["operation_count"] == 1
        assert payload["summary"]["totals"]["net_amount"] == pytest.approx(100.0)
        assert len(payload["line_items"]) == 1
        assert payload["rejected"][0]["error"] == "invalid_operation_data"
        assert payload["summary"]["filter_description"] == "June, Wizz Air"

    def test_unknown_currency_rejected_not_fatal(self):
        ops = [make_op(id="ok", days_ago=1), make_op(id="gbp", days_ago=2, currency="GBP")]
        payload = consolidated_invoice_payload(ops)
        assert [r["id"] for r in payload["rejected"]] == ["gbp"]
        assert payload["rejected"][0]["error"] == "invalid_currency"
        assert [item["id"] for item in payload["line_items"]] == ["ok"]
        assert payload["summary"]["currency_counts"] == {"BAM": 1}

    def test_groups_and_period(self):
        ops = [
            make_op(days_ago=1, destination="FRA", traffic_type=TrafficType.DOMESTIC),
            make_op(days_ago=3, destination="VIE"),
        ]
        payload = consolidated_invoice_payload(ops)
        assert set(payload["by_destination"]) == {"FRA", "VIE"}
        assert payload["summary"]["period_start"] < payload["summary"]["period_end"]
        json.loads(to_json(payload))

    def test_empty(self):
        payload = consolidated_invoice_payload([])
        assert payload["summary"]["dominant_currency"] == "BAM"
        assert payload["line_items"] == []
        assert payload["summary"]["period_start"] is None


class TestProjectionReport:
    def test_results_totals_and_charts(self):
        avg = HistoricalAverage(average=100, sample_size=2)
        batch = ProjectionEngine().project(
            [
                (ProjectionInputRow(airline_id="1", destination="FRA", monthly_operations_count=1), "Austrian", avg),
                (ProjectionInputRow(airline_id="2", destination="FRA", monthly_operations_count=2), "Wizz Air", avg),
            ]
        )
        payload = projection_report_payload(batch, selected_airlines=["Wizz Air"])
        assert len(payload["results"]) == 2
        assert payload["total"]["monthly"] == pytest.approx(300)
        assert payload["charts"]["by_airline"] == [
            {"key": "Wizz Air", "monthly_consumption": 200, "quarterly_consumption": 600, "yearly_consumption": 2400}
        ]
        assert payload["selected_airlines"] == ["Wizz Air"]
