"""
Tests for ChartService dispatch and highlight resolution.
"""

import logging

import pytest

from app.features.charts import ChartService, ChartType
from app.features.charts.builders.common import NO_FINISHERS_MESSAGE
from app.features.charts.errors import EmptyDatasetError


@pytest.fixture
def service():
    return ChartService()


# =============================================================================
# Test Render
# =============================================================================

class TestRender:
    """Tests for single chart rendering."""

    @pytest.mark.parametrize("chart_type,title", [
        (ChartType.NET_TIMES, "<title>Net finish times</title>"),
        ("histogram", "<title>Histogram of net finish times</title>"),
        ("start_buckets", "<title>Finish time vs start time</title>"),
        ("start_vs_finish", "<title>Relative Start Time vs Net Finish Time</title>"),
    ])
    def test_dispatch(self, service, race_records, chart_type, title):
        assert title in service.render(chart_type, race_records)

    def test_unknown_type(self, service, race_records):
        with pytest.raises(ValueError):
            service.render("pie", race_records)

    def test_service_bucket_size(self, race_records):
        svg = ChartService(bucket_size_seconds=120).render("histogram", race_records)
        assert "2-minute buckets" in svg

    def test_bucket_size_override(self, service, race_records):
        svg = service.render("histogram", race_records, bucket_size_seconds=30)
        assert "30-second buckets" in svg

    def test_highlight_by_index(self, service, race_records):
        svg = service.render("net_times", race_records, highlight_indices=[1])
        assert 'id="arrowhead-net-0"' in svg
        assert ">Nowak Anna</text>" in svg

    def test_empty_dataset(self, service, make_records):
        records = make_records(("0", "", "", "Out", "Runner"))
        with pytest.raises(EmptyDatasetError, match=NO_FINISHERS_MESSAGE):
            service.render("net_times", records)


# =============================================================================
# Test Render All
# =============================================================================

class TestRenderAll:
    """Tests for rendering every chart at once."""

    def test_all_charts(self, service, race_records):
        result = service.render_all(race_records)

        assert set(result.charts) == set(ChartType)
        assert result.errors == {}

    def test_start_charts_fail_without_start_times(self, service, no_start_records):
        result = service.render_all(no_start_records)

        assert set(result.charts) == {ChartType.NET_TIMES, ChartType.HISTOGRAM}
        assert result.errors == {
            ChartType.START_BUCKETS: NO_FINISHERS_MESSAGE,
            ChartType.START_VS_FINISH: NO_FINISHERS_MESSAGE,
        }

    def test_highlights_on_every_chart(self, service, race_records):
        result = service.render_all(race_records, highlight_indices=iter([0]))

        for svg in result.charts.values():
            assert ">Kowalski Jan</text>" in svg


# =============================================================================
# Test Highlight Resolution
# =============================================================================

class TestResolveHighlights:
    """Tests for mapping record indices to records."""

    def test_order_kept(self, race_records):
        selected = ChartService.resolve_highlights(race_records, [1, 0])
        assert [r.surname for r in selected] == ["Nowak", "Kowalski"]

    def test_unknown_and_repeated_skipped(self, race_records):
        selected = ChartService.resolve_highlights(race_records, [1, 99, 1, 0])
        assert [r.index for r in selected] == [1, 0]

    def test_all_selections_returned(self, crowd_records):
        selected = ChartService.resolve_highlights(crowd_records, range(12))
        assert [r.index for r in selected] == list(range(12))

    def test_render_caps_highlights_with_one_warning(self, service, crowd_records, caplog):
        with caplog.at_level(logging.WARNING):
            svg = service.render(ChartType.NET_TIMES, crowd_records, highlight_indices=range(12))

        assert svg.count('<marker id="arrowhead-net-') == 10
        warnings = [r for r in caplog.records if "highlighting the first" in r.getMessage()]
        assert len(warnings) == 1
