import pytest

from reflection.core.errors import NotFoundError, ValidationError

OWNER = "user-1"


def test_add_goal_assigns_next_order(repos):
    first = repos.goals.add_goal(OWNER, title="Run a marathon", year=2024)
    second = repos.goals.add_goal(OWNER, title="Read more", year=2024, description="24 books")
    other_year = repos.goals.add_goal(OWNER, title="Next year", year=2025)

    assert first.order == 1
    assert second.order == 2
    assert other_year.order == 1
    assert second.description == "24 books"


def test_add_goal_trims_and_rejects_empty_title(repos):
    goal = repos.goals.add_goal(OWNER, title="  Learn Spanish  ", year=2024)
    assert goal.title == "Learn Spanish"
    with pytest.raises(ValidationError):
        repos.goals.add_goal(OWNER, title="   ", year=2024)
    assert len(repos.goals.get_goals_for_year(OWNER, 2024)) == 1


def test_get_goals_for_year_is_scoped_and_sorted(repos):
    repos.goals.add_goal(OWNER, title="A", year=2024)
    repos.goals.add_goal(OWNER, title="B", year=2024)
    repos.goals.add_goal("someone-else", title="X", year=2024)
    repos.goals.add_goal(OWNER, title="Old", year=2023)

    titles = [g.title for g in repos.goals.get_goals_for_year(OWNER, 2024)]
    assert titles == ["A", "B"]


def test_update_goal_is_partial(repos):
    goal = repos.goals.add_goal(OWNER, title="Old title", year=2024, description="keep me")
    updated = repos.goals.update_goal(goal.id, title="New title")
    assert updated.title == "New title"
    assert updated.description == "keep me"

    updated = repos.goals.update_goal(goal.id, description="")
    assert updated.title == "New title"
    assert updated.description == ""


def test_update_goal_errors(repos):
    goal = repos.goals.add_goal(OWNER, title="Title", year=2024)
    with pytest.raises(ValidationError):
        repos.goals.update_goal(goal.id, title=" ")
    with pytest.raises(NotFoundError):
        repos.goals.update_goal("missing", title="x")
    assert repos.goals.get_goal(goal.id).title == "Title"


def test_delete_goal_cascades_check_ins(repos):
    keep = repos.goals.add_goal(OWNER, title="Keep", year=2024)
    drop = repos.goals.add_goal(OWNER, title="Drop", year=2024)
    for week in (1, 2, 3):
        repos.check_ins.save_or_update_check_in(drop.id, week, 2024, "note", 3)
    repos.check_ins.save_or_update_check_in(keep.id, 1, 2024, "note", 4)

    assert repos.goals.delete_goal(drop.id) == 3

    remaining = repos.check_ins.get_all_check_ins_for_user(OWNER)
    assert [c.goal_id for c in remaining] == [keep.id]
    assert repos.check_ins.get_check_ins_for_goal(drop.id) == []
    with pytest.raises(NotFoundError):
        repos.goals.get_goal(drop.id)
    with pytest.raises(NotFoundError):
        repos.goals.delete_goal(drop.id)


def test_reorder_goals(repos):
    a = repos.goals.add_goal(OWNER, title="A", year=2024)
    b = repos.goals.add_goal(OWNER, title="B", year=2024)
    c = repos.goals.add_goal(OWNER, title="C", year=2024)

    repos.goals.reorder_goals([c.id, a.id, b.id])

    goals = repos.goals.get_goals_for_year(OWNER, 2024)
    assert [(g.title, g.order) for g in goals] == [("C", 0), ("A", 1), ("B", 2)]

    # New goals still land at the end
    d = repos.goals.add_goal(OWNER, title="D", year=2024)
    assert d.order == 3


def test_reorder_requires_the_full_scope(repos):
    a = repos.goals.add_goal(OWNER, title="A", year=2024)
    b = repos.goals.add_goal(OWNER, title="B", year=2024)
    c = repos.goals.add_goal(OWNER, title="C", year=2024)
    other_year = repos.goals.add_goal(OWNER, title="Z", year=2025)

    with pytest.raises(ValidationError):
        repos.goals.reorder_goals([b.id, a.id])
    with pytest.raises(ValidationError):
        repos.goals.reorder_goals([a.id, a.id, b.id, c.id])
    with pytest.raises(ValidationError):
        repos.goals.reorder_goals([a.id, b.id, c.id, "missing"])
    with pytest.raises(ValidationError):
        repos.goals.reorder_goals([a.id, b.id, c.id, other_year.id])

    # Nothing moved
    assert [g.order for g in repos.goals.get_goals_for_year(OWNER, 2024)] == [1, 2, 3]


def test_reorder_empty_list_is_noop(repos):
    assert repos.goals.reorder_goals([]) == []


@pytest.mark.parametrize("year", [0, -5, 9999])
def test_add_goal_rejects_year_outside_calendar(repos, year):
    with pytest.raises(ValidationError):
        repos.goals.add_goal(OWNER, title="Far off", year=year)
