# tests/test_task_query.py

from __future__ import annotations

from taskboard.services.task_query import TaskFilter, filter_tasks, matches

from .factories import make_task


def _ids(tasks):
    return [t.id for t in tasks]


def test_empty_filter_returns_everything_in_order() -> None:
    tasks = [make_task(), make_task(), make_task()]
    assert _ids(filter_tasks(tasks, TaskFilter())) == _ids(tasks)


def test_empty_strings_impose_no_constraint() -> None:
    tasks = [make_task(priority="low"), make_task(priority="high")]
    f = TaskFilter(query="", priority="", category="", status="")
    assert _ids(filter_tasks(tasks, f)) == _ids(tasks)


def test_query_matches_text_case_insensitively() -> None:
    task = make_task(text="Buy Milk")
    assert matches(task, TaskFilter(query="milk"))
    assert matches(task, TaskFilter(query="MILK"))


def test_query_matches_notes_case_insensitively() -> None:
    task = make_task(text="groceries", notes="Oat MILK only")
    assert matches(task, TaskFilter(query="oat milk"))


def test_query_requires_exact_case_for_tags() -> None:
    task = make_task(text="groceries", tags=["Milk"])
    assert matches(task, TaskFilter(query="Milk"))
    assert not matches(task, TaskFilter(query="milk"))


def test_query_does_not_match_tag_substrings() -> None:
    task = make_task(text="groceries", tags=["milkshake"])
    assert not matches(task, TaskFilter(query="milk"))


def test_query_is_literal_not_a_pattern() -> None:
    task = make_task(text="abc")
    assert not matches(task, TaskFilter(query="a.c"))
    assert matches(make_task(text="costs $5 (approx)"), TaskFilter(query="$5 (a"))


def test_filters_are_combined_with_and() -> None:
    a = make_task(text="write report", priority="high", status="inprogress", category="work")
    b = make_task(text="write letter", priority="high", status="todo", category="work")
    c = make_task(text="write poem", priority="low", status="inprogress", category="home")

    f = TaskFilter(query="write", priority="high", status="inprogress")
    assert _ids(filter_tasks([a, b, c], f)) == [a.id]

    assert _ids(filter_tasks([a, b, c], TaskFilter(category="work"))) == [a.id, b.id]


def test_unknown_enum_value_matches_nothing() -> None:
    tasks = [make_task(priority="high"), make_task(priority="low")]
    assert filter_tasks(tasks, TaskFilter(priority="urgent")) == []
    assert filter_tasks(tasks, TaskFilter(status="archived")) == []


def test_filter_leaves_tasks_untouched() -> None:
    task = make_task(text="Buy Milk", tags=["shopping"])
    before = task.to_dict()
    filter_tasks([task], TaskFilter(query="milk", priority="medium"))
    assert task.to_dict() == before
