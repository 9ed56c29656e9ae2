"""
Notification rendering and delivery tests.
"""

from datetime import timedelta
from unittest import mock

from django.core import mail
from django.test import SimpleTestCase, TestCase

from apps.notifications.services import (
    NotificationKind, build_subject, deliver_notification, notify,
    reminder_urgency, status_payload, task_payload
)
from apps.reports.services import build_task_digest
from apps.tasks.models import Task
from tests.factories import WEDNESDAY, make_task, make_user


class ReminderUrgencyTests(SimpleTestCase):

    def test_wording(self):
        self.assertEqual(reminder_urgency(0), 'DUE TODAY!')
        self.assertEqual(reminder_urgency(1), 'due tomorrow')
        self.assertEqual(reminder_urgency(2), 'due in 2 days')
        self.assertEqual(reminder_urgency(-1), 'OVERDUE by 1 day')
        self.assertEqual(reminder_urgency(-3), 'OVERDUE by 3 days')
        self.assertEqual(reminder_urgency(None), 'has no due date')


class BuildSubjectTests(SimpleTestCase):

    def test_subjects(self):
        self.assertEqual(
            build_subject(NotificationKind.TASK_CREATED, {'title': 'Report'}),
            'New Task Assigned: Report'
        )
        self.assertEqual(
            build_subject(NotificationKind.STATUS_CHANGED, {'title': 'Report'}),
            'Task Status Updated: Report'
        )
        self.assertEqual(
            build_subject(NotificationKind.REMINDER, {'title': 'Report', 'priority': 'high'}),
            'Task Reminder: Report'
        )
        self.assertEqual(
            build_subject(NotificationKind.REMINDER, {'title': 'Report', 'priority': 'critical'}),
            'URGENT: Task Reminder: Report'
        )
        self.assertEqual(
            build_subject(NotificationKind.DIGEST, {'date': '2026-03-04'}),
            'Daily Task Digest - 2026-03-04'
        )


class DeliverNotificationTests(TestCase):

    def setUp(self):
        self.user = make_user(email='owner@example.com', first_name='Asha', last_name='Rao')

    def test_reminder_email(self):
        task = make_task(
            self.user, title='Ship release', priority=Task.Priority.CRITICAL,
            due_date=WEDNESDAY + timedelta(days=1)
        )

        sent = deliver_notification('reminder', task_payload(task, WEDNESDAY))

        self.assertTrue(sent)
        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.subject, 'URGENT: Task Reminder: Ship release')
        self.assertEqual(message.to, ['owner@example.com'])
        self.assertIn('due tomorrow', message.body)
        self.assertIn('Asha Rao', message.body)
        self.assertEqual(message.alternatives[0][1], 'text/html')

    def test_status_changed_email(self):
        task = make_task(self.user, title='Review', status=Task.Status.COMPLETED)

        deliver_notification('status_changed', status_payload(task, Task.Status.IN_PROGRESS))

        body = mail.outbox[0].body
        self.assertIn('In Progress', body)
        self.assertIn('Completed', body)
        self.assertIn('Congratulations', body)

    def test_digest_email(self):
        make_task(self.user, title='Overdue thing', due_date=WEDNESDAY - timedelta(days=1))
        payload = build_task_digest(self.user, WEDNESDAY).as_payload()

        deliver_notification('digest', payload)

        message = mail.outbox[0]
        self.assertEqual(message.subject, 'Daily Task Digest - 2026-03-04')
        self.assertIn('OVERDUE TASKS', message.body)
        self.assertIn('Overdue thing', message.body)

    def test_unknown_kind_is_dropped(self):
        with self.assertLogs('apps.notifications.services', level='ERROR') as logs:
            self.assertFalse(deliver_notification('fax', {'recipient_email': 'owner@example.com'}))
        self.assertEqual(logs.records[0].getMessage(), 'Unknown notification kind: fax')
        self.assertEqual(len(mail.outbox), 0)

    def test_missing_recipient_is_dropped(self):
        self.assertFalse(deliver_notification('reminder', {'title': 'x'}))
        self.assertEqual(len(mail.outbox), 0)

    def test_send_failure_returns_false(self):
        task = make_task(self.user, due_date=WEDNESDAY)

        with mock.patch(
            'apps.notifications.services.EmailMultiAlternatives.send',
            side_effect=ConnectionRefusedError('smtp down')
        ), self.assertLogs('apps.notifications.services', level='ERROR') as logs:
            self.assertFalse(deliver_notification('task_created', task_payload(task, WEDNESDAY)))

        record = logs.records[0]
        self.assertEqual(record.getMessage(), 'Failed to send task_created email to owner@example.com')
        self.assertIsInstance(record.exc_info[1], ConnectionRefusedError)


class NotifyTests(SimpleTestCase):

    def test_queues_delivery(self):
        with mock.patch('apps.notifications.services.async_task') as async_task:
            self.assertTrue(notify(NotificationKind.REMINDER, {'recipient_email': 'a@example.com'}))

        async_task.assert_called_once_with(
            'apps.notifications.services.deliver_notification',
            'reminder',
            {'recipient_email': 'a@example.com'},
            group='notification:reminder',
        )

    def test_queue_failure_is_swallowed(self):
        with mock.patch('apps.notifications.services.async_task', side_effect=RuntimeError('down')):
            self.assertFalse(notify(NotificationKind.DIGEST, {'recipient_email': 'a@example.com'}))
