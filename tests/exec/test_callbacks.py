"""Tests for callback-style and synchronous entry points."""

import asyncio
import logging

import pytest

from rollback.exec.callbacks import (
    run_all,
    run_rollback,
    schedule_all,
    schedule_rollback,
)
from rollback.tasks.normalize import RollbackTask


class TestScheduleAll:
    def test_works_without_callback(self):
        """Fire-and-forget still runs every task to completion."""
        state = {}

        async def task():
            await asyncio.sleep(0.01)
            state["a"] = 1

        async def scenario():
            schedule_all([task])
            await asyncio.sleep(0.05)

        asyncio.run(scenario())
        assert state == {"a": 1}

    def test_callback_receives_errors_and_results(self, fail_tasks, task_error):
        calls = []

        async def scenario():
            handle = schedule_all(fail_tasks, lambda *args: calls.append(args))
            return await handle

        outcome = asyncio.run(scenario())
        assert calls == [
            ({"one": None, "two": task_error, "three": None}, {"one": 1, "two": None, "three": 3})
        ]
        assert outcome.errors == calls[0][0]

    def test_callback_gets_none_on_success(self, success_tasks):
        calls = []

        async def scenario():
            await schedule_all(list(success_tasks.values()), lambda *args: calls.append(args))

        asyncio.run(scenario())
        assert calls == [(None, [1, 2, 3])]

    def test_invalid_input_raises_immediately(self):
        async def scenario():
            schedule_all({1, 2, 3})

        with pytest.raises(TypeError):
            asyncio.run(scenario())

    def test_requires_running_loop(self, success_tasks):
        with pytest.raises(RuntimeError):
            schedule_all(success_tasks)

    def test_raising_callback_is_logged(self, caplog, success_tasks):
        """A failing callback is logged and becomes the task's exception."""
        caplog.set_level(logging.ERROR, logger="rollback")

        def callback(errors, results):
            raise RuntimeError("callback broke")

        async def scenario():
            await schedule_all(success_tasks, callback)

        with pytest.raises(RuntimeError, match="callback broke"):
            asyncio.run(scenario())
        records = [r for r in caplog.records if r.name == "rollback.exec.callbacks"]
        assert len(records) == 1
        assert records[0].levelno == logging.ERROR
        assert records[0].getMessage() == (
            "Callback for scheduled batch failed: RuntimeError: callback broke"
        )


class TestScheduleRollback:
    def test_undo_runs_before_callback(self, fail_tasks, undo_recorder):
        undo = undo_recorder()
        seen = []

        def callback(errors, results):
            seen.append(list(undo.calls))

        tasks = [
            RollbackTask(fail_tasks["one"], undo=undo),
            fail_tasks["two"],
            RollbackTask(fail_tasks["three"], undo=undo),
        ]

        async def scenario():
            await schedule_rollback(tasks, callback)

        asyncio.run(scenario())
        assert len(seen) == 1
        assert sorted(seen[0]) == [1, 3]

    @pytest.mark.parametrize("tasks, expected", [([], []), ({}, {})])
    def test_empty_collection(self, tasks, expected):
        calls = []

        async def scenario():
            return await schedule_rollback(tasks, lambda *args: calls.append(args))

        outcome = asyncio.run(scenario())
        assert calls == [(None, expected)]
        assert type(outcome.results) is type(expected)


class TestSyncRunners:
    def test_run_all(self, fail_tasks, task_error):
        errors, results = run_all(list(fail_tasks.values()))
        assert errors == [None, task_error, None]
        assert results == [1, None, 3]

    def test_run_rollback(self, fail_tasks, undo_recorder):
        undo = undo_recorder()
        outcome = run_rollback({"one": RollbackTask(fail_tasks["one"], undo=undo), "two": fail_tasks["two"]})
        assert outcome.failed
        assert undo.calls == [1]

    def test_run_all_empty(self):
        assert tuple(run_all({})) == (None, {})
