"""
Management command to set up Django-Q2 schedules for the task jobs.

This command creates/updates the scheduled tasks required for:
- Daily, weekly and monthly recurring task generation
- Overdue task sweep
- Deadline reminder checks
- Daily digest emails

Cadences come from settings.TASK_SCHEDULES.

Usage:
    python manage.py setup_schedules

The command is idempotent - safe to run multiple times.
Existing schedules will be updated if their configuration changes.
"""
from django.conf import settings
from django.core.management.base import BaseCommand
from django_q.models import Schedule

INTERVAL_TYPES = {
    'minutes': Schedule.MINUTES,
    'hourly': Schedule.HOURLY,
    'daily': Schedule.DAILY,
}


def schedule_defaults(func, cadence, minutes=None):
    """
    Build Schedule fields for a job.

    `cadence` is either a named interval ('hourly', 'daily') or a cron
    expression.
    """
    defaults = {
        'func': func,
        'repeats': -1,  # Run forever
    }
    if minutes is not None:
        defaults.update({'schedule_type': Schedule.MINUTES, 'minutes': minutes})
    elif cadence in INTERVAL_TYPES:
        defaults['schedule_type'] = INTERVAL_TYPES[cadence]
    else:
        defaults.update({'schedule_type': Schedule.CRON, 'cron': cadence})
    return defaults


def get_job_schedules():
    """(name, defaults, description) for every scheduled job."""
    cadences = settings.TASK_SCHEDULES
    generation = cadences['generation_cron']
    reminder_minutes = cadences['reminder_interval_minutes']

    return [
        (
            'Daily Task Generation',
            schedule_defaults('apps.notifications.tasks.generate_daily_tasks', generation),
            f'cron {generation}',
        ),
        (
            'Weekly Task Generation',
            schedule_defaults('apps.notifications.tasks.generate_weekly_tasks', generation),
            f'cron {generation}',
        ),
        (
            'Monthly Task Generation',
            schedule_defaults('apps.notifications.tasks.generate_monthly_tasks', generation),
            f'cron {generation}',
        ),
        (
            'Overdue Task Check',
            schedule_defaults('apps.notifications.tasks.update_overdue_tasks', cadences['overdue_check']),
            cadences['overdue_check'],
        ),
        (
            'Task Reminder Check',
            schedule_defaults(
                'apps.notifications.tasks.check_task_reminders', None, minutes=reminder_minutes
            ),
            f'every {reminder_minutes} minutes',
        ),
        (
            'Daily Task Digest',
            schedule_defaults('apps.notifications.tasks.send_daily_digests', cadences['digest_cron']),
            f"cron {cadences['digest_cron']}",
        ),
    ]


class Command(BaseCommand):
    help = 'Set up Django-Q2 schedules for task generation, reminder and digest jobs'

    def handle(self, *args, **options):
        self.stdout.write('\nSetting up Django-Q2 schedules...\n')

        schedules_created = 0
        schedules_updated = 0
        jobs = get_job_schedules()

        for name, defaults, description in jobs:
            schedule, created = Schedule.objects.update_or_create(
                name=name,
                defaults=defaults,
            )
            if created:
                schedules_created += 1
                self.stdout.write(
                    self.style.SUCCESS(f'✓ Created schedule: {name} ({description})')
                )
            else:
                schedules_updated += 1
                self.stdout.write(
                    self.style.WARNING(f'↻ Updated schedule: {name} ({description})')
                )

        # Summary
        total = schedules_created + schedules_updated
        self.stdout.write('')

        if schedules_created > 0 and schedules_updated > 0:
            self.stdout.write(
                self.style.SUCCESS(
                    f'Done! {schedules_created} schedule(s) created, '
                    f'{schedules_updated} schedule(s) updated. '
                    f'Total: {total} schedules configured.'
                )
            )
        elif schedules_created > 0:
            self.stdout.write(
                self.style.SUCCESS(f'Done! {schedules_created} schedules configured.')
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(
                    f'Done! All {total} schedules already exist and were updated.'
                )
            )

        self.stdout.write('')
        self.stdout.write('Schedule Summary:')
        for name, _, description in jobs:
            self.stdout.write(f'  • {name:<24} → {description}')
        self.stdout.write('')
        self.stdout.write(
            self.style.NOTICE(
                'Note: Ensure Django-Q cluster is running: python manage.py qcluster'
            )
        )
        self.stdout.write('')
