"""
Run the program maintenance sweep once, in the foreground.

Usage:
    python manage.py run_program_maintenance
    python manage.py run_program_maintenance --date=2026-01-31
"""
import datetime

from django.core.management.base import BaseCommand, CommandError

from apps.ngo.services.maintenance import sweep_programs


class Command(BaseCommand):
    help = 'Advance program status by date and purge expired programs'

    def add_arguments(self, parser):
        parser.add_argument(
            '--date',
            type=str,
            help='Treat this day (YYYY-MM-DD) as today',
        )

    def handle(self, *args, **options):
        today = None
        if options.get('date'):
            try:
                today = datetime.date.fromisoformat(options['date'])
            except ValueError:
                raise CommandError(f"Invalid --date {options['date']!r}; expected YYYY-MM-DD")

        result = sweep_programs(today)
        self.stdout.write(
            f"{result.today}: started {result.started}, finished {result.finished}, purged {result.purged}"
        )
        if result.failed_steps:
            raise CommandError(f"Failed steps: {', '.join(result.failed_steps)}")
        self.stdout.write(self.style.SUCCESS('Program maintenance complete'))
