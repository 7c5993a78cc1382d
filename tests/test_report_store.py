from datetime import datetime

import pytest

from api.reports.reports_model import ReportStatus
from api.reports.reports_repository import InvalidStatusTransition
from api.user.user_model import User, UserRole
from api.user.user_schema import ReportUser


def add(store, **kwargs):
    data = {"latitude": 28.6139, "longitude": 77.2090}
    data.update(kwargs)
    return store.add_report(**data)


def test_add_report_defaults_to_pending_with_fresh_id(store):
    first = add(store, description="plastic near well")
    second = add(store)

    assert first.status == ReportStatus.PENDING
    assert first.id.startswith("report_")
    assert first.id != second.id
    assert isinstance(first.created_at, datetime)
    assert first.cleaning is None
    assert first.user == ReportUser()


def test_add_report_keeps_explicit_status(store):
    report = add(store, status=ReportStatus.IN_PROGRESS)
    assert report.status == ReportStatus.IN_PROGRESS


def test_plastic_near_well_is_cleaned(store):
    report = add(store, description="plastic near well")
    assert [r.id for r in store.list_reports()] == [report.id]
    assert store.list_reports()[0].status == ReportStatus.PENDING

    cleaned = store.add_cleaning(report.id, "after.jpg")

    assert cleaned.status == ReportStatus.COMPLETED
    assert cleaned.cleaning.after_image_url == "after.jpg"
    assert cleaned.cleaning.cleaned_at >= cleaned.created_at
    assert store.get_report(report.id).status == ReportStatus.COMPLETED


def test_update_status_on_missing_report_changes_nothing(store):
    report = add(store)
    before = store.list_reports()

    assert store.update_status("report_0_missing", ReportStatus.IN_PROGRESS) is None
    assert store.list_reports() == before
    assert store.get_report(report.id).status == ReportStatus.PENDING


def test_add_cleaning_on_missing_report(store):
    add(store)
    assert store.add_cleaning("report_0_missing", "after.jpg") is None
    assert store.list_reports_by_status(ReportStatus.COMPLETED) == []


def test_update_status_to_in_progress(store):
    report = add(store)
    updated = store.update_status(report.id, ReportStatus.IN_PROGRESS)

    assert updated.status == ReportStatus.IN_PROGRESS
    assert store.get_report(report.id).status == ReportStatus.IN_PROGRESS


def test_completed_only_through_cleaning(store):
    report = add(store)
    with pytest.raises(InvalidStatusTransition):
        store.update_status(report.id, ReportStatus.COMPLETED)
    assert store.get_report(report.id).status == ReportStatus.PENDING


def test_completed_report_cannot_be_reopened(store):
    report = add(store)
    store.add_cleaning(report.id, "after.jpg")
    with pytest.raises(InvalidStatusTransition):
        store.update_status(report.id, ReportStatus.PENDING)
    assert store.get_report(report.id).status == ReportStatus.COMPLETED


def test_second_cleaning_replaces_after_photo(store):
    report = add(store)
    first = store.add_cleaning(report.id, "after.jpg")
    second = store.add_cleaning(report.id, "after-2.jpg")

    assert second.cleaning.id == first.cleaning.id
    assert second.cleaning.after_image_url == "after-2.jpg"


def test_list_by_status_is_exact_subset_newest_first(store):
    reports = [add(store, description=f"spot {i}") for i in range(5)]
    store.update_status(reports[1].id, ReportStatus.IN_PROGRESS)
    store.update_status(reports[3].id, ReportStatus.IN_PROGRESS)

    in_progress = store.list_reports_by_status(ReportStatus.IN_PROGRESS)
    pending = store.list_reports_by_status(ReportStatus.PENDING)

    assert {r.id for r in in_progress} == {reports[1].id, reports[3].id}
    assert {r.id for r in pending} == {reports[0].id, reports[2].id, reports[4].id}
    for subset in (in_progress, pending, store.list_reports()):
        stamps = [r.created_at for r in subset]
        assert stamps == sorted(stamps, reverse=True)


def test_list_by_user_email(store):
    mine = add(store, user=ReportUser(name="Asha", email="asha@village.com"))
    add(store, user=ReportUser(name="Ravi", email="ravi@village.com"))
    add(store)

    found = store.list_reports_by_user("asha@village.com")

    assert [r.id for r in found] == [mine.id]
    assert found[0].user.name == "Asha"
    assert store.list_reports_by_user("nobody@village.com") == []


def test_stats_counts_every_status(store):
    a = add(store)
    b = add(store)
    add(store)
    store.update_status(a.id, ReportStatus.IN_PROGRESS)
    store.add_cleaning(b.id, "after.jpg")

    stats = store.stats()

    assert (stats.total, stats.pending, stats.in_progress, stats.completed) == (3, 1, 1, 1)


def test_memory_store_returns_copies(memory_store):
    report = add(memory_store)
    listed = memory_store.list_reports()
    listed[0].status = ReportStatus.COMPLETED

    assert memory_store.get_report(report.id).status == ReportStatus.PENDING


def test_memory_store_keeps_insertion_order(memory_store):
    ids = [add(memory_store).id for _ in range(3)]
    assert [r.id for r in memory_store.list_reports()] == list(reversed(ids))


def test_database_store_reuses_user_by_email(sql_store, db):
    add(sql_store, user=ReportUser(name="Asha", email="asha@village.com"))
    add(sql_store, user=ReportUser(name="Asha K", email="asha@village.com"))

    users = db.query(User).filter(User.email == "asha@village.com").all()
    assert len(users) == 1
    assert users[0].role == UserRole.villager
    assert users[0].points == 20


def test_database_store_anonymous_report_has_no_user(sql_store, db):
    add(sql_store)
    assert db.query(User).count() == 0


def test_database_store_name_without_email_creates_user(sql_store, db):
    report = add(sql_store, user=ReportUser(name="Anonymous Villager"))
    assert report.user.name == "Anonymous Villager"
    assert report.user.email is None
    assert db.query(User).count() == 1


def test_database_store_rewards_volunteer(sql_store, db):
    report = add(sql_store)
    sql_store.add_cleaning(report.id, "after.jpg", volunteer=ReportUser(name="Meera", email="meera@village.com"))

    volunteer = db.query(User).filter(User.email == "meera@village.com").one()
    assert volunteer.role == UserRole.volunteer
    assert volunteer.points == 15
    assert [log.reason for log in volunteer.points_log] == ["cleaned_area"]
