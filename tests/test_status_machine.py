"""Tests unitaires pour la machine à états des saisies."""

import pytest

from domain.entities import TimeLogStatus
from domain.exceptions import ValidationError
from domain.status_machine import STATUSES, allowed_transitions, transition


def test_every_status_reachable_from_every_status():
    for current in TimeLogStatus:
        assert allowed_transitions(current) == STATUSES
        for requested in TimeLogStatus:
            assert transition(current, requested) == requested


def test_done_can_go_back_to_todo():
    status = transition("done", "todo")
    assert status == TimeLogStatus.TODO
    assert transition(status, "in-progress") == TimeLogStatus.IN_PROGRESS


def test_unknown_status_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        transition("todo", "blocked")

    assert exc_info.value.field == "status"
    assert "todo, in-progress, or done" in exc_info.value.message


def test_status_strings_are_exact():
    for value in ("Done", "in_progress", "", None):
        with pytest.raises(ValidationError):
            transition("todo", value)
