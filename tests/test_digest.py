"""
Digest aggregation tests.
"""

import json
from datetime import timedelta

from django.test import TestCase

from apps.reports.services import NO_DUE_DATE, TaskSummary, build_task_digest, get_user_task_stats
from apps.tasks.models import Task
from tests.factories import WEDNESDAY, make_task, make_user


class TaskDigestTests(TestCase):

    def setUp(self):
        self.user = make_user(email='owner@example.com', first_name='Asha', last_name='Rao')
        self.today = WEDNESDAY
        day = lambda n: self.today + timedelta(days=n)  # noqa: E731

        # 10 tasks covering every bucket
        make_task(self.user, title='today-todo', due_date=day(0))
        make_task(self.user, title='today-progress', due_date=day(0), status=Task.Status.IN_PROGRESS)
        make_task(self.user, title='today-done', due_date=day(0), status=Task.Status.COMPLETED)
        make_task(self.user, title='late', due_date=day(-2), status=Task.Status.OVERDUE)
        make_task(self.user, title='late-unswept', due_date=day(-1))
        make_task(self.user, title='late-done', due_date=day(-3), status=Task.Status.COMPLETED)
        make_task(self.user, title='tomorrow', due_date=day(1))
        make_task(self.user, title='next-week-done', due_date=day(7), status=Task.Status.COMPLETED)
        make_task(self.user, title='too-far', due_date=day(8))
        make_task(self.user, title='no-due')

        # Someone else's task never shows up
        make_task(make_user(), title='other', due_date=day(0))

        self.digest = build_task_digest(self.user, self.today)

    def titles(self, summaries):
        return sorted(summary.title for summary in summaries)

    def test_counts(self):
        self.assertEqual(self.digest.total_tasks, 10)
        self.assertEqual(self.digest.completed_tasks, 3)
        self.assertEqual(self.digest.pending_tasks, 7)
        self.assertEqual(self.digest.overdue_tasks, 2)

    def test_due_today_bucket(self):
        self.assertEqual(self.titles(self.digest.todays_tasks), ['today-progress', 'today-todo'])

    def test_overdue_bucket(self):
        self.assertEqual(self.titles(self.digest.overdue_tasks_list), ['late', 'late-unswept'])

    def test_upcoming_bucket_includes_any_status(self):
        self.assertEqual(self.titles(self.digest.upcoming_tasks), ['next-week-done', 'tomorrow'])

    def test_summary_fields(self):
        summary = next(s for s in self.digest.upcoming_tasks if s.title == 'tomorrow')
        self.assertEqual(summary.priority, 'medium')
        self.assertEqual(summary.due_date, (self.today + timedelta(days=1)).isoformat())
        self.assertEqual(summary.days_until_deadline, 1)

    def test_payload_is_json_serialisable(self):
        payload = self.digest.as_payload()

        self.assertEqual(json.loads(json.dumps(payload))['total_tasks'], 10)
        self.assertEqual(payload['date'], self.today.isoformat())
        self.assertEqual(payload['recipient_email'], 'owner@example.com')
        self.assertEqual(payload['user_name'], 'Asha Rao')

    def test_digest_has_no_side_effects(self):
        statuses = list(Task.objects.order_by('id').values_list('status', flat=True))
        build_task_digest(self.user, self.today)
        self.assertEqual(list(Task.objects.order_by('id').values_list('status', flat=True)), statuses)

    def test_stats_match_digest_counts(self):
        self.assertEqual(
            get_user_task_stats(self.user, self.today),
            {'total': 10, 'completed': 3, 'pending': 7, 'overdue': 2}
        )


class TaskSummaryTests(TestCase):

    def test_no_due_date_sentinel(self):
        task = make_task(make_user(), title='no-due')
        summary = TaskSummary.from_task(task, WEDNESDAY)

        self.assertEqual(summary.due_date, NO_DUE_DATE)
        self.assertIsNone(summary.days_until_deadline)

    def test_empty_digest(self):
        digest = build_task_digest(make_user(), WEDNESDAY)

        self.assertEqual(digest.total_tasks, 0)
        self.assertEqual(digest.todays_tasks, [])
        self.assertEqual(digest.overdue_tasks_list, [])
        self.assertEqual(digest.upcoming_tasks, [])


class DigestCountTests(TestCase):

    def test_six_completed_four_pending_one_overdue(self):
        user = make_user()
        for _ in range(6):
            make_task(user, status=Task.Status.COMPLETED, due_date=WEDNESDAY - timedelta(days=5))
        make_task(user, due_date=WEDNESDAY - timedelta(days=1))
        make_task(user, due_date=WEDNESDAY)
        make_task(user, due_date=WEDNESDAY + timedelta(days=3))
        make_task(user)

        digest = build_task_digest(user, WEDNESDAY)

        self.assertEqual(
            (digest.total_tasks, digest.completed_tasks, digest.pending_tasks, digest.overdue_tasks),
            (10, 6, 4, 1)
        )

    def test_summary_without_due_date(self):
        task = make_task(make_user())
        summary = TaskSummary.from_task(task, WEDNESDAY)

        self.assertEqual(summary.due_date, NO_DUE_DATE)
        self.assertIsNone(summary.days_until_deadline)
