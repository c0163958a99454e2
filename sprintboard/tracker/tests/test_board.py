from types import SimpleNamespace

from django.http import QueryDict

from tracker.selectors.board import (
    IssueFilter, build_board_columns, build_swimlanes, filter_issues, group_backlog, matches_filter,
)


def issue(pk, status="todo", **kw):
    defaults = dict(
        id=pk, issue_number=pk, title=f"Issue {pk}", type="task", priority="medium",
        assignee_id=None, assignee=None, sprint_id=None, parent_id=None, parent=None, story_points=None,
    )
    defaults.update(kw)
    return SimpleNamespace(status=status, **defaults)


def sprint(pk, status="planning", name=None):
    return SimpleNamespace(id=pk, status=status, name=name or f"Sprint {pk}")


# ---- Filter predicate
def test_empty_filter_keeps_everything():
    issues = [issue(1), issue(2)]
    assert filter_issues(issues, IssueFilter()) == issues


def test_filter_is_and_across_criteria():
    bug = issue(1, type="bug", priority="high")
    task = issue(2, type="task", priority="high")
    low_bug = issue(3, type="bug", priority="low")
    flt = IssueFilter(types=("bug",), priorities=("high",))
    assert filter_issues([bug, task, low_bug], flt) == [bug]


def test_filter_values_within_criterion_are_or():
    flt = IssueFilter(statuses=("todo", "done"))
    assert [i.id for i in filter_issues([issue(1), issue(2, "done"), issue(3, "in_review")], flt)] == [1, 2]


def test_unassigned_matches_no_assignee():
    flt = IssueFilter(assignees=("unassigned",))
    assert matches_filter(issue(1), flt)
    assert not matches_filter(issue(2, assignee_id=7), flt)


def test_assignee_filter_matches_id():
    flt = IssueFilter(assignees=("7", "unassigned"))
    assert matches_filter(issue(1, assignee_id=7), flt)
    assert matches_filter(issue(2), flt)
    assert not matches_filter(issue(3, assignee_id=8), flt)


def test_text_matches_title_or_key_case_insensitive():
    flt = IssueFilter(text="LOGIN")
    assert matches_filter(issue(1, title="Fix login page"), flt, "WEB")
    assert matches_filter(issue(12, title="Other"), IssueFilter(text="web-12"), "WEB")
    assert not matches_filter(issue(13, title="Other"), flt, "WEB")


def test_filter_from_query_params():
    flt = IssueFilter.from_params(QueryDict("type=bug,story&priority=high&priority=low&q=+abc+&assignee=unassigned"))
    assert flt.types == ("bug", "story")
    assert flt.priorities == ("high", "low")
    assert flt.assignees == ("unassigned",)
    assert flt.text == "abc"


def test_filter_from_saved_criteria_dict():
    flt = IssueFilter.from_params({"status": ["todo", "done"], "assignee": 3, "text": "x"})
    assert flt.statuses == ("todo", "done")
    assert flt.assignees == ("3",)
    assert flt.text == "x"
    assert IssueFilter.from_params(None).is_empty


# ---- Board columns
def test_columns_follow_default_order_with_hidden_backlog():
    columns = build_board_columns([issue(1), issue(2, "backlog"), issue(3, "done")])
    assert [c.status for c in columns] == ["todo", "in_progress", "in_review", "done", "backlog"]
    assert [c.visible for c in columns] == [True, True, True, True, False]


def test_every_issue_lands_in_exactly_one_column():
    issues = [issue(1), issue(2, "backlog"), issue(3, "done"), issue(4, "in_review")]
    columns = build_board_columns(issues, column_order=["todo", "done"])
    assert sum(c.count for c in columns) == len(issues)
    hidden = {c.status for c in columns if not c.visible}
    assert hidden == {"backlog", "in_progress", "in_review"}


def test_configured_order_is_kept():
    columns = build_board_columns([], column_order=["done", "todo", "unknown", "done"])
    assert [c.status for c in columns if c.visible] == ["done", "todo"]


def test_wip_limit_is_advisory():
    issues = [issue(1, "in_progress"), issue(2, "in_progress"), issue(3, "in_progress")]
    columns = {c.status: c for c in build_board_columns(issues, wip_limits={"in_progress": 2, "todo": 5})}
    assert columns["in_progress"].over_limit is True
    assert columns["in_progress"].count == 3
    assert columns["todo"].over_limit is False
    assert columns["done"].wip_limit is None


def test_unknown_status_gets_hidden_column():
    columns = build_board_columns([issue(1, "blocked")])
    blocked = columns[-1]
    assert blocked.status == "blocked"
    assert blocked.label == "blocked"
    assert blocked.visible is False


# ---- Swimlanes
def test_no_swimlane_grouping_is_one_lane():
    lanes = build_swimlanes([issue(1), issue(2)], "none")
    assert len(lanes) == 1
    assert lanes[0].count == 2


def test_priority_lanes_follow_registry_order():
    lanes = build_swimlanes([issue(1, priority="low"), issue(2, priority="highest"), issue(3, priority="low")], "priority")
    assert [lane.key for lane in lanes] == ["highest", "low"]
    assert [lane.label for lane in lanes] == ["Highest", "Low"]


def test_assignee_lanes_put_unassigned_last():
    alice = SimpleNamespace(pk=5, username="alice", get_full_name=lambda: "Alice A")
    lanes = build_swimlanes([issue(1), issue(2, assignee_id=5, assignee=alice)], "assignee")
    assert [lane.label for lane in lanes] == ["Alice A", "Unassigned"]


def test_epic_lanes():
    epic = SimpleNamespace(title="Checkout")
    lanes = build_swimlanes([issue(1, parent_id=9, parent=epic), issue(2)], "epic")
    assert [lane.label for lane in lanes] == ["Checkout", "No epic"]


# ---- Backlog grouping
def test_backlog_groups_active_first_then_planning_then_backlog():
    sprints = [sprint(1, "planning"), sprint(2, "active"), sprint(3, "completed"), sprint(4, "planning")]
    issues = [
        issue(1, sprint_id=1, story_points=3),
        issue(2, sprint_id=2, story_points=5),
        issue(3, sprint_id=2),
        issue(4, story_points=2),
        issue(5, sprint_id=3, story_points=8),
    ]
    groups = group_backlog(issues, sprints)
    assert [g.label for g in groups] == ["Sprint 2", "Sprint 1", "Sprint 4", "Backlog"]
    assert [g.story_points for g in groups] == [5, 3, 0, 10]
    # issue 5 sits in a completed sprint
    assert [i.id for i in groups[-1].issues] == [4, 5]


def test_backlog_filters_before_grouping():
    groups = group_backlog(
        [issue(1, type="bug", sprint_id=1), issue(2, type="task", sprint_id=1), issue(3, type="bug")],
        [sprint(1, "active")],
        IssueFilter(types=("bug",)),
    )
    assert [[i.id for i in g.issues] for g in groups] == [[1], [3]]


def test_backlog_always_has_backlog_group():
    groups = group_backlog([], [])
    assert len(groups) == 1
    assert groups[0].sprint is None
    assert groups[0].story_points == 0
