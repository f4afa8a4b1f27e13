"""Tests for the database history store."""

from rota.domain.models import AssignmentRecord
from rota.domain.repositories import AssignmentRepository
from rota.domain.roster import Week
from rota.domain.table import AssignmentTable


def _table(week, assignee):
    table = AssignmentTable(week, ["Clean", "Cook"])
    table.set("Mon", "Clean", assignee)
    table.set("Tue", "Cook", assignee)
    return table


def test_load_table_empty_database(db_session, week):
    assert AssignmentRepository.load_table(db_session, week, ["Clean"]) is None
    assert AssignmentRepository.counts(db_session) == {}


def test_replace_period_keeps_only_latest(db_session, week):
    AssignmentRepository.replace_period(db_session, _table(week, "Alice"))
    written = AssignmentRepository.replace_period(db_session, _table(week, "Bob"))

    assert written == 2
    assert db_session.query(AssignmentRecord).count() == 2
    assert AssignmentRepository.counts(db_session) == {"Bob": 2}

    table = AssignmentRepository.load_table(db_session, week, ["Clean", "Cook"])
    assert list(table.cells()) == [("Mon", "Clean", "Bob"), ("Tue", "Cook", "Bob")]


def test_load_table_drops_retired_tasks(db_session, week):
    AssignmentRepository.replace_period(db_session, _table(week, "Alice"))

    table = AssignmentRepository.load_table(db_session, week, ["Clean"])
    assert list(table.cells()) == [("Mon", "Clean", "Alice")]
    # counts still cover the whole saved period
    assert AssignmentRepository.counts(db_session) == {"Alice": 2}


def test_records_ordered_by_week_position(db_session):
    week = Week(("Mon", "Tue"))
    table = AssignmentTable(week, ["Clean"])
    table.set("Tue", "Clean", "Bob")
    table.set("Mon", "Clean", "Alice")
    AssignmentRepository.replace_period(db_session, table)

    records = AssignmentRepository.get_all(db_session)
    assert [(r.day, r.person) for r in records] == [("Mon", "Alice"), ("Tue", "Bob")]
