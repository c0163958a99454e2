from tracker.constants import (
    LINK_TYPES, NEUTRAL_COLOR, PROJECT_ROLES, REGISTRIES, STATUS_COLUMNS, STATUSES,
    IssueStatus, LinkType,
)


def test_known_status_lookup():
    meta = STATUSES.get("in_progress")
    assert meta.label == "In Progress"
    assert meta.known is True
    assert meta.color != NEUTRAL_COLOR


def test_unknown_key_falls_back_to_raw_key():
    meta = STATUSES.get("blocked")
    assert meta.label == "blocked"
    assert meta.color == NEUTRAL_COLOR
    assert meta.known is False


def test_none_key_never_raises():
    assert STATUSES.label(None) == ""
    assert STATUSES.color(None) == NEUTRAL_COLOR


def test_default_board_columns_exclude_backlog():
    assert list(STATUS_COLUMNS) == ["todo", "in_progress", "in_review", "done"]
    assert IssueStatus.BACKLOG not in STATUS_COLUMNS
    assert set(STATUS_COLUMNS) < set(STATUSES.keys())


def test_link_types_carry_inverse():
    assert LINK_TYPES.get(LinkType.BLOCKS).inverse == "is blocked by"
    assert LINK_TYPES.get(LinkType.RELATES_TO).inverse == "relates to"


def test_project_roles_have_description():
    assert all(PROJECT_ROLES.get(k).description for k in PROJECT_ROLES)


def test_registries_as_list():
    statuses = REGISTRIES["status"].as_list()
    assert [s["key"] for s in statuses] == ["backlog", "todo", "in_progress", "in_review", "done"]
    assert statuses[1]["label"] == "To Do"
