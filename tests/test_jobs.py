"""
Scheduled job entry point tests.
"""

from datetime import timedelta
from io import StringIO
from unittest import mock

from django.conf import settings
from django.core.management import call_command
from django.db import DatabaseError
from django.test import TestCase, override_settings
from django_q.models import Schedule

from apps.notifications import tasks as jobs
from apps.tasks.models import Task
from tests.factories import WEDNESDAY, aware, make_task, make_template, make_user


def frozen_clock(day, hour=6):
    """Patch the clock read by the job entry points."""
    return mock.patch.multiple(
        'apps.notifications.tasks.timezone',
        localdate=mock.Mock(return_value=day),
        now=mock.Mock(return_value=aware(day, hour)),
    )


class GenerationJobTests(TestCase):

    def setUp(self):
        self.user = make_user()
        make_template(self.user, title='Daily')
        make_template(self.user, title='Weekly', recurrence_type='weekly', day_of_week=3)
        make_template(self.user, title='Monthly', recurrence_type='monthly', day_of_month=4)

    def test_each_job_generates_its_kind(self):
        with frozen_clock(WEDNESDAY):
            self.assertEqual(jobs.generate_daily_tasks(), 1)
            self.assertEqual(jobs.generate_weekly_tasks(), 1)
            self.assertEqual(jobs.generate_monthly_tasks(), 1)

            # Re-running is harmless
            self.assertEqual(jobs.generate_daily_tasks(), 0)

        self.assertEqual(
            sorted(Task.objects.values_list('title', flat=True)),
            ['Daily', 'Monthly', 'Weekly']
        )


class OverdueJobTests(TestCase):

    def test_update_overdue_tasks(self):
        user = make_user()
        make_task(user, due_date=WEDNESDAY - timedelta(days=1))

        with frozen_clock(WEDNESDAY):
            self.assertEqual(jobs.update_overdue_tasks(), 1)

    def test_never_raises(self):
        with mock.patch('apps.notifications.tasks.sweep_overdue_tasks', side_effect=DatabaseError('down')):
            self.assertEqual(jobs.update_overdue_tasks(), 0)


class ReminderJobTests(TestCase):

    def test_check_task_reminders(self):
        user = make_user()
        make_task(user, due_date=WEDNESDAY)

        with frozen_clock(WEDNESDAY), mock.patch('apps.notifications.services.async_task'):
            self.assertEqual(jobs.check_task_reminders(), 1)
            self.assertEqual(jobs.check_task_reminders(), 0)


class DigestJobTests(TestCase):

    def test_sends_to_opted_in_active_users(self):
        opted_in = make_user(email='in@example.com')
        make_user(email='out@example.com', email_digest_enabled=False)
        make_user(email='gone@example.com', is_active=False)

        with frozen_clock(WEDNESDAY), mock.patch('apps.notifications.services.async_task') as async_task:
            self.assertEqual(jobs.send_daily_digests(), 1)

        _, kind, payload = async_task.call_args.args
        self.assertEqual(kind, 'digest')
        self.assertEqual(payload['recipient_email'], opted_in.email)
        self.assertEqual(payload['date'], WEDNESDAY.isoformat())

    def test_failure_for_one_user_does_not_stop_others(self):
        make_user(email='a@example.com')
        make_user(email='b@example.com')
        real_build = jobs.build_task_digest

        def build(user, today):
            if user.email == 'a@example.com':
                raise DatabaseError('timeout')
            return real_build(user, today)

        with frozen_clock(WEDNESDAY), \
                mock.patch('apps.notifications.tasks.build_task_digest', side_effect=build), \
                mock.patch('apps.notifications.services.async_task') as async_task:
            self.assertEqual(jobs.send_daily_digests(), 1)

        self.assertEqual(async_task.call_args.args[2]['recipient_email'], 'b@example.com')


class SetupSchedulesCommandTests(TestCase):

    def call(self):
        out = StringIO()
        call_command('setup_schedules', stdout=out)
        return out.getvalue()

    def test_creates_all_schedules(self):
        output = self.call()

        self.assertIn('Done! 6 schedules configured.', output)
        funcs = set(Schedule.objects.values_list('func', flat=True))
        self.assertEqual(funcs, {
            'apps.notifications.tasks.generate_daily_tasks',
            'apps.notifications.tasks.generate_weekly_tasks',
            'apps.notifications.tasks.generate_monthly_tasks',
            'apps.notifications.tasks.update_overdue_tasks',
            'apps.notifications.tasks.check_task_reminders',
            'apps.notifications.tasks.send_daily_digests',
        })

        generation = Schedule.objects.get(name='Daily Task Generation')
        self.assertEqual(generation.schedule_type, Schedule.CRON)
        self.assertEqual(generation.cron, '0 6 * * *')

        overdue = Schedule.objects.get(name='Overdue Task Check')
        self.assertEqual(overdue.schedule_type, Schedule.HOURLY)

        reminders = Schedule.objects.get(name='Task Reminder Check')
        self.assertEqual(reminders.schedule_type, Schedule.MINUTES)
        self.assertEqual(reminders.minutes, 120)

        digest = Schedule.objects.get(name='Daily Task Digest')
        self.assertEqual(digest.cron, '0 8 * * *')

    def test_is_idempotent(self):
        self.call()
        output = self.call()

        self.assertEqual(Schedule.objects.count(), 6)
        self.assertIn('already exist and were updated', output)

    @override_settings(TASK_SCHEDULES={
        'generation_cron': '30 5 * * *',
        'overdue_check': 'daily',
        'reminder_interval_minutes': 60,
        'digest_cron': '0 9 * * 1-5',
    })
    def test_cadences_from_settings(self):
        self.call()

        self.assertEqual(Schedule.objects.get(name='Weekly Task Generation').cron, '30 5 * * *')
        self.assertEqual(Schedule.objects.get(name='Overdue Task Check').schedule_type, Schedule.DAILY)
        self.assertEqual(Schedule.objects.get(name='Task Reminder Check').minutes, 60)
        self.assertEqual(Schedule.objects.get(name='Daily Task Digest').cron, '0 9 * * 1-5')


class ClusterSettingsTests(TestCase):

    def test_retry_outlasts_timeout(self):
        cluster = settings.Q_CLUSTER
        self.assertTrue(cluster['sync'])
        self.assertGreater(cluster['retry'], cluster['timeout'])
