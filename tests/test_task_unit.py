#!/usr/bin/env python3
"""Unit tests for the Task entity."""

from datetime import datetime

from core import Task, new_task_id

NOW = datetime(2025, 3, 12, 10, 0)


def test_new_ids_are_unique():
    assert len({new_task_id() for _ in range(50)}) == 50


def test_create_sets_created_and_defaults():
    task = Task.create("Write report", now=NOW)
    assert task.title == "Write report"
    assert task.created == NOW
    assert task.description == ""
    assert task.completed is False
    assert task.due is None and task.defer_until is None


def test_with_fields_keeps_identity():
    task = Task.create(now=NOW)
    due = datetime(2025, 3, 13, 17, 0)
    updated = task.with_fields(title="A", description="B", due=due, defer_until=None)
    assert updated.id == task.id
    assert updated.created == task.created
    assert (updated.title, updated.description, updated.due) == ("A", "B", due)
    assert task.title == ""


def test_toggled_returns_copy():
    task = Task.create(now=NOW)
    done = task.toggled()
    assert done.completed is True
    assert task.completed is False
    assert done.toggled().completed is False
