"""
JSON API tests.
"""

from datetime import timedelta
from unittest import mock

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from apps.recurring.models import TaskTemplate
from apps.tasks.models import Task
from tests.factories import make_task, make_template, make_user


class APITestCase(TestCase):

    def setUp(self):
        self.user = make_user(email='owner@example.com')
        self.other = make_user(email='other@example.com')
        self.client.force_login(self.user)
        self.today = timezone.localdate()

        patcher = mock.patch('apps.notifications.services.async_task')
        self.async_task = patcher.start()
        self.addCleanup(patcher.stop)


class TaskListViewTests(APITestCase):

    def test_requires_login(self):
        self.client.logout()
        response = self.client.get(reverse('tasks:task_list'))
        self.assertEqual(response.status_code, 302)

    def test_lists_only_own_tasks(self):
        mine = make_task(self.user, title='mine')
        make_task(self.other, title='theirs')

        data = self.client.get(reverse('tasks:task_list')).json()

        self.assertEqual(data['count'], 1)
        self.assertEqual(data['results'][0]['id'], mine.pk)

    def test_filters(self):
        make_task(self.user, title='a', priority='high', category='Docs', due_date=self.today)
        make_task(self.user, title='b', priority='low', category='Docs', due_date=self.today + timedelta(days=10))
        make_task(self.user, title='c', priority='high', status='completed', is_recurring=True)

        def titles(**params):
            data = self.client.get(reverse('tasks:task_list'), params).json()
            return sorted(task['title'] for task in data['results'])

        self.assertEqual(titles(priority='high'), ['a', 'c'])
        self.assertEqual(titles(status='completed'), ['c'])
        self.assertEqual(titles(category='docs'), ['a', 'b'])
        self.assertEqual(titles(due_from=self.today.isoformat(), due_to=(self.today + timedelta(days=1)).isoformat()), ['a'])
        self.assertEqual(titles(is_recurring='true'), ['c'])

    def test_invalid_filter_value(self):
        response = self.client.get(reverse('tasks:task_list'), {'due_from': 'not-a-date'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('due_from', response.json()['errors'])

    def test_create_task(self):
        response = self.client.post(reverse('tasks:task_list'), {
            'title': 'Write report',
            'priority': 'critical',
            'due_date': self.today.isoformat(),
            'category': 'Reporting',
        })

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data['title'], 'Write report')
        self.assertEqual(data['status'], 'todo')
        self.assertEqual(data['days_until_deadline'], 0)
        self.assertEqual(Task.objects.get().user, self.user)

    def test_create_task_validation(self):
        response = self.client.post(reverse('tasks:task_list'), {'title': '', 'priority': 'urgent'})

        self.assertEqual(response.status_code, 400)
        errors = response.json()['errors']
        self.assertIn('title', errors)
        self.assertIn('priority', errors)

    def test_pending_overdue_due_today(self):
        make_task(self.user, title='late', due_date=self.today - timedelta(days=1))
        make_task(self.user, title='today', due_date=self.today, priority='critical')
        make_task(self.user, title='done', due_date=self.today, status='completed')

        pending = self.client.get(reverse('tasks:pending_tasks')).json()
        self.assertEqual([t['title'] for t in pending['results']], ['today', 'late'])

        overdue = self.client.get(reverse('tasks:overdue_tasks')).json()
        self.assertEqual([t['title'] for t in overdue['results']], ['late'])

        due_today = self.client.get(reverse('tasks:due_today_tasks')).json()
        self.assertEqual([t['title'] for t in due_today['results']], ['today'])


class TaskDetailViewTests(APITestCase):

    def setUp(self):
        super().setUp()
        self.task = make_task(self.user, title='Old', category='Docs', due_date=self.today)

    def test_detail(self):
        data = self.client.get(reverse('tasks:task_detail', args=[self.task.pk])).json()
        self.assertEqual(data['title'], 'Old')

    def test_other_users_task_is_404(self):
        theirs = make_task(self.other)
        for name in ('tasks:task_detail', 'tasks:task_status_change', 'tasks:task_delete'):
            response = self.client.post(reverse(name, args=[theirs.pk]), {'status': 'completed'})
            self.assertEqual(response.status_code, 404)
        self.assertEqual(self.client.get(reverse('tasks:task_detail', args=[theirs.pk])).status_code, 404)

    def test_partial_update(self):
        response = self.client.post(
            reverse('tasks:task_detail', args=[self.task.pk]),
            {'title': 'New', 'priority': 'high'}
        )

        self.assertEqual(response.status_code, 200)
        self.task.refresh_from_db()
        self.assertEqual(self.task.title, 'New')
        self.assertEqual(self.task.priority, 'high')
        self.assertEqual(self.task.category, 'Docs')
        self.assertEqual(self.task.due_date, self.today)

    def test_status_change(self):
        response = self.client.post(
            reverse('tasks:task_status_change', args=[self.task.pk]), {'status': 'completed'}
        )

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['status'], 'completed')
        self.assertIsNotNone(data['completed_at'])

    def test_manual_overdue_rejected(self):
        response = self.client.post(
            reverse('tasks:task_status_change', args=[self.task.pk]), {'status': 'overdue'}
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn('status', response.json()['errors'])

    def test_delete(self):
        response = self.client.post(reverse('tasks:task_delete', args=[self.task.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertFalse(Task.objects.filter(pk=self.task.pk).exists())

    def test_delete_requires_post(self):
        response = self.client.get(reverse('tasks:task_delete', args=[self.task.pk]))
        self.assertEqual(response.status_code, 405)


class TemplateViewTests(APITestCase):

    def test_create_and_list(self):
        response = self.client.post(reverse('recurring:template_list'), {
            'title': 'Weekly notes',
            'recurrence_type': 'weekly',
            'day_of_week': 3,
            'days_to_complete': 2,
        })

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data['schedule_display'], 'Weekly on Wednesday')
        self.assertEqual(data['priority'], 'medium')
        self.assertTrue(data['is_active'])

        make_template(self.other, title='theirs')
        listing = self.client.get(reverse('recurring:template_list')).json()
        self.assertEqual([t['title'] for t in listing['results']], ['Weekly notes'])

    def test_field_errors(self):
        response = self.client.post(reverse('recurring:template_list'), {
            'title': 'Bad', 'recurrence_type': 'weekly', 'day_of_week': 9,
        })

        self.assertEqual(response.status_code, 400)
        self.assertIn('day_of_week', response.json()['errors'])

    def test_schedule_error(self):
        response = self.client.post(reverse('recurring:template_list'), {
            'title': 'Bad', 'recurrence_type': 'monthly',
        })

        self.assertEqual(response.status_code, 400)
        self.assertIn('day of month', response.json()['error'])

    def test_update_toggle_active_delete(self):
        template = make_template(self.user, title='Daily')

        response = self.client.post(
            reverse('recurring:template_detail', args=[template.pk]), {'days_to_complete': 3}
        )
        self.assertEqual(response.json()['days_to_complete'], 3)
        self.assertEqual(response.json()['title'], 'Daily')

        self.client.post(reverse('recurring:template_toggle', args=[template.pk]))
        active = self.client.get(reverse('recurring:active_templates')).json()
        self.assertEqual(active['count'], 0)

        self.client.post(reverse('recurring:template_delete', args=[template.pk]))
        self.assertFalse(TaskTemplate.objects.exists())

    def test_other_users_template_is_404(self):
        theirs = make_template(self.other)
        response = self.client.get(reverse('recurring:template_detail', args=[theirs.pk]))
        self.assertEqual(response.status_code, 404)


class ReportViewTests(APITestCase):

    def test_stats(self):
        make_task(self.user, status='completed')
        make_task(self.user, due_date=self.today - timedelta(days=1))

        data = self.client.get(reverse('reports:task_stats')).json()

        self.assertEqual(data, {'total': 2, 'completed': 1, 'pending': 1, 'overdue': 1})

    def test_digest_snapshot_sends_nothing(self):
        make_task(self.user, title='today', due_date=self.today)

        data = self.client.get(reverse('reports:task_digest')).json()

        self.assertEqual(data['date'], self.today.isoformat())
        self.assertEqual([t['title'] for t in data['todays_tasks']], ['today'])
        self.async_task.assert_not_called()
