from __future__ import annotations

import datetime
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError
from django.test import TestCase, override_settings

from apps.ngo import tasks
from apps.ngo.models import Program
from apps.ngo.services.maintenance import SweepResult, retention_cutoff, sweep_programs

TODAY = datetime.date(2026, 3, 10)


def _create(program_id, status, start=None, end=None):
    return Program.objects.create(
        program_id=program_id,
        program_name=program_id,
        status=status,
        start_date=start,
        end_date=end,
    )


def _status(program_id):
    return Program.objects.get(pk=program_id).status


class SweepProgramsTests(TestCase):
    def setUp(self):
        _create("due-today", "planned", start=TODAY, end=datetime.date(2026, 12, 31))
        _create("due-legacy", "PENDING", start=datetime.date(2026, 3, 1), end=datetime.date(2026, 12, 31))
        _create("not-yet", "planned", start=datetime.date(2026, 4, 1), end=datetime.date(2026, 12, 31))
        _create("ended", "running", start=datetime.date(2025, 1, 1), end=datetime.date(2026, 3, 9))
        _create("ends-today", "IN_PROGRESS", start=datetime.date(2025, 1, 1), end=TODAY)
        _create("expired", "finished", end=datetime.date(2023, 3, 9))
        _create("at-cutoff", "completed", end=datetime.date(2023, 3, 10))

    def test_sweep_advances_and_purges(self):
        result = sweep_programs(TODAY)

        self.assertEqual((result.started, result.finished, result.purged), (2, 1, 1))
        self.assertTrue(result.ok)
        self.assertEqual(_status("due-today"), "running")
        self.assertEqual(_status("due-legacy"), "running")
        self.assertEqual(_status("not-yet"), "planned")
        self.assertEqual(_status("ended"), "finished")
        self.assertEqual(_status("ends-today"), "IN_PROGRESS")
        self.assertFalse(Program.objects.filter(pk="expired").exists())
        self.assertEqual(_status("at-cutoff"), "completed")

    def test_mixed_case_and_spaced_statuses_are_advanced(self):
        _create("title-pending", "Pending", start=datetime.date(2026, 3, 1), end=datetime.date(2026, 12, 31))
        _create("title-planned", " Planned ", start=TODAY, end=datetime.date(2026, 12, 31))
        _create("spaced-running", "In Progress", start=datetime.date(2025, 1, 1), end=datetime.date(2026, 3, 1))
        _create("title-running", "Running", start=datetime.date(2025, 1, 1), end=datetime.date(2026, 3, 1))

        result = sweep_programs(TODAY)

        self.assertEqual((result.started, result.finished), (4, 3))
        self.assertEqual(_status("title-pending"), "running")
        self.assertEqual(_status("title-planned"), "running")
        self.assertEqual(_status("spaced-running"), "finished")
        self.assertEqual(_status("title-running"), "finished")

    def test_second_run_same_day_changes_nothing(self):
        sweep_programs(TODAY)
        result = sweep_programs(TODAY)
        self.assertEqual((result.started, result.finished, result.purged), (0, 0, 0))

    def test_steps_run_in_order(self):
        _create("old-planned", "planned", start=datetime.date(2020, 1, 1), end=datetime.date(2022, 1, 1))
        result = sweep_programs(TODAY)
        # started, then finished, then purged within the same run
        self.assertEqual((result.started, result.finished, result.purged), (3, 2, 2))
        self.assertFalse(Program.objects.filter(pk="old-planned").exists())

    def test_failed_step_does_not_stop_the_rest(self):
        with mock.patch(
            "apps.ngo.services.maintenance._finish_ended_programs",
            side_effect=DatabaseError("locked"),
        ):
            with self.assertLogs("apps.ngo.services.maintenance", level="ERROR"):
                result = sweep_programs(TODAY)

        self.assertEqual(result.failed_steps, ["finish"])
        self.assertFalse(result.ok)
        self.assertEqual(result.started, 2)
        self.assertEqual(result.purged, 1)
        self.assertEqual(_status("ended"), "running")

    @override_settings(PROGRAM_RETENTION_YEARS=1)
    def test_retention_is_configurable(self):
        result = sweep_programs(TODAY)
        self.assertEqual(result.purged, 2)


class RetentionCutoffTests(TestCase):
    def test_three_years_back(self):
        self.assertEqual(retention_cutoff(TODAY, 3), datetime.date(2023, 3, 10))

    def test_leap_day_clamps(self):
        self.assertEqual(retention_cutoff(datetime.date(2028, 2, 29), 3), datetime.date(2025, 2, 28))


class MaintenanceTaskTests(TestCase):
    def test_task_returns_counts_and_releases_connections(self):
        outcome = SweepResult(today=TODAY, started=1, finished=2, purged=3)
        with mock.patch.object(tasks, "sweep_programs", return_value=outcome), \
            mock.patch.object(tasks, "close_old_connections") as close:
            result = tasks.run_program_maintenance()

        self.assertEqual(result["started"], 1)
        self.assertEqual(result["purged"], 3)
        self.assertEqual(result["today"], "2026-03-10")
        close.assert_called_once()

    def test_task_swallows_failures(self):
        with mock.patch.object(tasks, "sweep_programs", side_effect=RuntimeError("boom")), \
            mock.patch.object(tasks, "close_old_connections") as close:
            with self.assertLogs("apps.ngo.tasks", level="ERROR"):
                result = tasks.run_program_maintenance()

        self.assertIn("error", result)
        close.assert_called_once()

    def test_worker_start_queues_one_run(self):
        with mock.patch.object(tasks.run_program_maintenance, "delay") as delay:
            tasks.queue_startup_maintenance(sender=None)
        delay.assert_called_once_with()


class MaintenanceCommandTests(TestCase):
    def test_command_runs_for_given_date(self):
        _create("due", "planned", start=TODAY)
        out = StringIO()
        call_command("run_program_maintenance", "--date", "2026-03-10", stdout=out)
        self.assertIn("started 1", out.getvalue())
        self.assertEqual(_status("due"), "running")

    def test_command_rejects_bad_date(self):
        with self.assertRaises(CommandError):
            call_command("run_program_maintenance", "--date", "10/03/2026", stdout=StringIO())
