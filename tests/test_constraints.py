from rota.constraints import is_eligible, violates_rotation, within_load_cap
from rota.domain.roster import Person, Task, Week
from rota.domain.table import AssignmentTable

WEEK = Week(("Mon", "Tue", "Wed"))


def test_eligibility_requires_every_skill():
    alice = Person("Alice", skills=frozenset({"A"}), unavailable=frozenset({"Mon"}))
    both = Task("Both", skills=frozenset({"A", "B"}), days=("Mon", "Tue"))
    only_a = Task("OnlyA", skills=frozenset({"A"}), days=("Mon", "Tue"))

    # Missing skill B: ineligible whatever the day
    assert not is_eligible(alice, both, "Mon")
    assert not is_eligible(alice, both, "Tue")
    assert is_eligible(alice, only_a, "Tue")
    # Unavailable on Mon
    assert not is_eligible(alice, only_a, "Mon")


def test_task_without_skills_is_open_to_everyone():
    bob = Person("Bob")
    chore = Task("Chore", days=("Mon",))
    assert is_eligible(bob, chore, "Mon")


def test_load_cap():
    capped = Person("Cap", max_load=2)
    assert within_load_cap(capped, 1)
    assert not within_load_cap(capped, 2)
    assert not within_load_cap(capped, 0, extra=3)
    assert within_load_cap(Person("Free"), 100, extra=5)


def test_rotation_same_day_last_period():
    alice = Person("Alice")
    bob = Person("Bob")
    task = Task("Clean", days=WEEK.days)
    prior = AssignmentTable(WEEK, ["Clean"])
    prior.set("Tue", "Clean", "Alice")
    current = AssignmentTable(WEEK, ["Clean"])

    assert violates_rotation(alice, task, "Tue", current, prior)
    assert not violates_rotation(alice, task, "Wed", current, prior)
    assert not violates_rotation(bob, task, "Tue", current, prior)


def test_rotation_previous_day_uses_week_order():
    alice = Person("Alice")
    task = Task("Clean", days=WEEK.days)
    current = AssignmentTable(WEEK, ["Clean"])
    current.set("Tue", "Clean", "Alice")

    assert violates_rotation(alice, task, "Wed", current, None)
    # Mon comes before Tue, so Tue's assignee does not block Mon
    assert not violates_rotation(alice, task, "Mon", current, None)


def test_rotation_ignores_prior_slots_missing_from_current_catalog():
    alice = Person("Alice")
    task = Task("Clean", days=WEEK.days)
    prior = AssignmentTable(WEEK, ["Other"])
    prior.set("Mon", "Other", "Alice")
    current = AssignmentTable(WEEK, ["Clean"])
    assert not violates_rotation(alice, task, "Mon", current, prior)
