"""Unit tests for the in-memory dashboard store."""

import pytest

from app.exceptions import ConflictError, NotFoundError, ThreadValidationError
from app.models import TeamMemberCreate, TeamMemberUpdate, ThreadCreate
from app.services.mock_store import MockStore


@pytest.fixture
def store():
    return MockStore()


class TestThreads:
    def test_seeded(self, store):
        threads, total = store.list_threads()
        assert total == 4
        assert threads[0].id == "1"

    def test_filter_and_paginate(self, store):
        threads, total = store.list_threads(source="slack")
        assert total == 2
        assert {t.id for t in threads} == {"1", "3"}

        page, total = store.list_threads(limit=1, offset=1)
        assert total == 4
        assert [t.id for t in page] == ["2"]

    def test_status_filter(self, store):
        threads, total = store.list_threads(status="pending")
        assert total == 1
        assert threads[0].source.value == "teams"

    def test_get_missing(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            store.get_thread("nope")
        assert exc_info.value.message == "Thread not found"

    def test_create_prepends_pending(self, store):
        created = store.create_thread(ThreadCreate(title="New"))
        threads, total = store.list_threads()
        assert total == 5
        assert threads[0].id == created.id
        assert created.status.value == "pending"
        assert created.source.value == "slack"

    def test_ids_are_unique(self, store):
        first = store.create_thread(ThreadCreate())
        second = store.create_thread(ThreadCreate())
        assert first.id != second.id


class TestMembers:
    def test_department_case_insensitive(self, store):
        members, total = store.list_members(department="engineering")
        assert total == 3
        assert all(m.department == "Engineering" for m in members)

    def test_add_requires_name_and_email(self, store):
        with pytest.raises(ThreadValidationError) as exc_info:
            store.add_member(TeamMemberCreate(name="Kim"))
        assert exc_info.value.message == "Name and email are required"

    def test_add_duplicate_email(self, store):
        with pytest.raises(ConflictError):
            store.add_member(TeamMemberCreate(name="John", email="john.doe@company.com"))

    def test_add_defaults(self, store):
        member = store.add_member(TeamMemberCreate(name="Kim", email="kim@company.com"))
        assert member.role == "Team Member"
        assert member.department == "General"
        assert member.status.value == "offline"
        assert member.threads_participated == 0
        assert len(member.join_date) == 10

    def test_update_merges_and_keeps_id(self, store):
        updated = store.update_member("2", TeamMemberUpdate(role="Staff Engineer", status="away"))
        assert updated.id == "2"
        assert updated.role == "Staff Engineer"
        assert updated.status.value == "away"
        assert updated.name == "Sarah Smith"
        assert store.get_member("2").role == "Staff Engineer"

    def test_update_missing(self, store):
        with pytest.raises(NotFoundError):
            store.update_member("99", TeamMemberUpdate(role="x"))

    def test_update_to_taken_email(self, store):
        with pytest.raises(ConflictError):
            store.update_member("2", TeamMemberUpdate(email="john.doe@company.com"))


class TestAnalytics:
    def test_seeded_analytics(self, store):
        assert len(store.analytics.threads_processed) == 15
        assert store.analytics.summary.total_threads == 342

    def test_reset_restores_seed(self, store):
        store.create_thread(ThreadCreate())
        store.reset()
        assert store.list_threads()[1] == 4
