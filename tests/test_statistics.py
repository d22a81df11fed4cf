"""Tests for dashboard and analytics aggregation."""

from datetime import date, datetime, timedelta, timezone

import pytest

from conftest import make_complaint
from civicdesk.complaints.application import ComplaintService
from civicdesk.config import ComplaintStatus, Priority
from civicdesk.core import UnauthorizedException
from civicdesk.sla.application import ComplaintStatistics, SLAService


class TestDashboard:
    """Headline numbers at a fixed instant."""

    def test_counts(self, sample_complaints, now):
        stats = ComplaintStatistics().dashboard(sample_complaints, now)

        assert stats.total == 5
        assert stats.pending == 3
        assert stats.overdue == 1
        assert stats.approaching == 1
        assert stats.resolved_today == 0

    def test_average_resolution_over_completed_only(self, sample_complaints, now):
        stats = ComplaintStatistics().dashboard(sample_complaints, now)
        assert stats.avg_resolution_hours == pytest.approx(10.0)

    def test_sla_compliance_counts_within_or_completed(self, sample_complaints, now):
        stats = ComplaintStatistics().dashboard(sample_complaints, now)
        assert stats.sla_compliance_percent == pytest.approx(40.0)

    def test_breakdowns(self, sample_complaints, now):
        stats = ComplaintStatistics().dashboard(sample_complaints, now)

        assert stats.by_status == {
            "New": 1, "Seen": 1, "Assigned": 0, "In Progress": 1, "Completed": 1, "Closed": 1,
        }
        assert stats.by_priority == {"High": 2, "Medium": 2, "Low": 1}
        assert stats.by_department == {"Water": 2, "Roads": 2, "Garbage": 1}

    def test_daily_created_covers_last_seven_days(self, sample_complaints, now):
        stats = ComplaintStatistics().dashboard(sample_complaints, now)

        assert stats.daily_created == [
            (date(2024, 3, 4), 0),
            (date(2024, 3, 5), 0),
            (date(2024, 3, 6), 1),
            (date(2024, 3, 7), 0),
            (date(2024, 3, 8), 2),
            (date(2024, 3, 9), 1),
            (date(2024, 3, 10), 1),
        ]

    def test_resolved_today(self, now):
        complaints = [
            make_complaint(
                "a", created_at=now - timedelta(hours=5), updated_at=now - timedelta(hours=1),
                status=ComplaintStatus.COMPLETED,
            ),
            make_complaint(
                "b", created_at=now - timedelta(hours=5), updated_at=now - timedelta(hours=1),
                status=ComplaintStatus.CLOSED,
            ),
        ]
        assert ComplaintStatistics().dashboard(complaints, now).resolved_today == 1

    def test_empty_set(self, now):
        stats = ComplaintStatistics().dashboard([], now)

        assert stats.total == 0
        assert stats.avg_resolution_hours == 0.0
        assert stats.sla_compliance_percent == 0.0


class TestAnalytics:

    @pytest.fixture
    def report(self, sample_complaints, department_config, now):
        return ComplaintStatistics().analytics(sample_complaints, department_config.names, now)

    def test_departments_in_table_order(self, report):
        assert [d.department for d in report.departments] == [
            "Water", "Roads", "Electricity", "Garbage", "Health", "Education",
        ]

    def test_department_figures(self, report):
        water, roads, electricity, garbage = report.departments[:4]

        assert (water.total, water.resolved, water.pending, water.overdue) == (2, 1, 1, 0)
        assert water.avg_resolution_hours == pytest.approx(10.0)
        assert water.resolution_rate == pytest.approx(50.0)
        assert (roads.total, roads.resolved, roads.pending, roads.overdue) == (2, 0, 1, 0)
        assert electricity.total == 0
        assert electricity.resolution_rate == 0.0
        assert (garbage.pending, garbage.overdue) == (1, 1)

    def test_priority_figures(self, report):
        by_priority = {p.priority: p for p in report.priorities}

        assert by_priority[Priority.HIGH].total == 2
        assert by_priority[Priority.MEDIUM].overdue == 1
        assert by_priority[Priority.LOW].resolution_rate == pytest.approx(100.0)

    def test_sla_performance(self, report):
        assert report.sla_performance.within_percent == pytest.approx(40.0)
        assert report.sla_performance.approaching == 1
        assert report.sla_performance.breached == 1

    def test_top_locations(self, report):
        assert report.top_locations[0] == ("Market Square", 2)
        assert len(report.top_locations) == 4

    def test_unknown_department_appended(self, sample_complaints, department_config, now):
        complaints = sample_complaints + [make_complaint("x", "Parks", created_at=now)]
        report = ComplaintStatistics().analytics(complaints, department_config.names, now)
        assert report.departments[-1].department == "Parks"

    def test_monthly_trend_covers_six_calendar_months(self, sample_complaints, department_config, now):
        january = datetime(2024, 1, 20, 8, 0, tzinfo=timezone.utc)
        complaints = sample_complaints + [
            make_complaint("jan-1", "Water", january, january + timedelta(hours=5),
                           status=ComplaintStatus.COMPLETED),
            make_complaint("jan-2", "Roads", january),
            make_complaint("old", "Roads", datetime(2023, 8, 31, 23, 0, tzinfo=timezone.utc)),
        ]

        trend = ComplaintStatistics().analytics(complaints, department_config.names, now).monthly_trend

        assert [month for month, _, _ in trend] == [
            date(2023, 10, 1), date(2023, 11, 1), date(2023, 12, 1),
            date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1),
        ]
        assert trend[3] == (date(2024, 1, 1), 2, 1)
        assert trend[4] == (date(2024, 2, 1), 0, 0)
        assert trend[5] == (date(2024, 3, 1), 5, 1)

    def test_monthly_trend_crosses_year_boundary(self):
        now = datetime(2024, 2, 1, 0, 30, tzinfo=timezone.utc)
        trend = ComplaintStatistics.monthly_trend([], now)

        assert trend[0][0] == date(2023, 9, 1)
        assert trend[-1][0] == date(2024, 2, 1)


class TestSLAService:
    """Actor scoping for SLA reads."""

    @pytest.mark.asyncio
    async def test_dashboard_scoped_to_department(self, memory_repository, department_provider, water_admin, now):
        service = SLAService(ComplaintService(memory_repository, department_provider))
        stats = await service.dashboard(water_admin, now)

        assert stats.total == 2
        assert stats.by_department == {"Water": 2}

    @pytest.mark.asyncio
    async def test_analytics_main_admin_only(self, memory_repository, department_provider, water_admin):
        service = SLAService(ComplaintService(memory_repository, department_provider))
        with pytest.raises(UnauthorizedException):
            await service.analytics(water_admin)

    @pytest.mark.asyncio
    async def test_status_for(self, memory_repository, department_provider, roads_admin, now):
        service = SLAService(ComplaintService(memory_repository, department_provider))
        complaint, result = await service.status_for(roads_admin, "c2", now)

        assert complaint.id == "c2"
        assert result.status.value == "approaching"
