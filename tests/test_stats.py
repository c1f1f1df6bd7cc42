from study_timer.stats import daily_distribution, subject_allocation, summary_text, weekly_totals


def test_daily_distribution_sorted_and_filtered():
    dist = daily_distribution({"math": 0.5, "art": 0.0, "physics": 1.5})
    assert dist == [("physics", 1.5), ("math", 0.5)]


def test_subject_allocation_percentages():
    assert subject_allocation({"math": 1.0, "physics": 3.0, "art": 0}) == {"physics": 75.0, "math": 25.0}
    assert subject_allocation({"math": 0.0}) == {}


def test_weekly_totals(ledger):
    ledger.add_study_time("math", "2025-01-07", 1.0)
    ledger.add_study_time("physics", "2025-01-07", 0.5)
    ledger.add_study_time("math", "2025-01-01", 0.4)
    ledger.add_study_time("math", "2024-12-31", 2.0)
    week = weekly_totals(ledger, "2025-01-07")
    assert [d for d, _ in week] == [f"2025-01-0{i}" for i in range(1, 8)]
    totals = dict(week)
    assert totals["2025-01-07"] == 1.5
    assert totals["2025-01-01"] == 0.4
    assert totals["2025-01-03"] == 0.0


def test_summary_text_combines_today_and_week(ledger):
    ledger.add_study_time("physics", "2025-01-07", 3.0)
    ledger.add_study_time("math", "2025-01-07", 1.0)
    ledger.add_study_time("math", "2025-01-03", 0.4)
    text = summary_text(ledger.study_time_for("2025-01-07"), weekly_totals(ledger, "2025-01-07"))
    assert text == "Today: physics: 3.0h (75%), math: 1.0h (25%) | Last 7 days: 4.4h"


def test_summary_text_empty_day():
    assert summary_text({"math": 0.0}, []) == "Today: nothing yet | Last 7 days: 0.0h"
