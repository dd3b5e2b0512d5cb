from unittest import TestCase

from cloud_admin.rpc.names import (InvalidResourceNameError, format_database_name, format_project_name,
                                   format_session_name, format_subscription_name, format_topic_name,
                                   parse_project_from_subscription_name, parse_session_name,
                                   parse_subscription_from_subscription_name, parse_topic_from_topic_name)


class TestResourceNames(TestCase):
    def test_format(self):
        self.assertEqual('projects/p1', format_project_name('p1'))
        self.assertEqual('projects/p1/topics/t1', format_topic_name('p1', 't1'))
        self.assertEqual('projects/p1/subscriptions/s1', format_subscription_name('p1', 's1'))
        self.assertEqual('projects/p1/instances/i1/databases/d1', format_database_name('p1', 'i1', 'd1'))
        self.assertEqual('projects/p1/instances/i1/databases/d1/sessions/x',
                         format_session_name('p1', 'i1', 'd1', 'x'))

    def test_parse(self):
        self.assertEqual('t1', parse_topic_from_topic_name('projects/p1/topics/t1'))
        self.assertEqual('p1', parse_project_from_subscription_name('projects/p1/subscriptions/s1'))
        self.assertEqual('s1', parse_subscription_from_subscription_name('projects/p1/subscriptions/s1'))
        self.assertEqual(dict(project='p1', instance='i1', database='d1', session='x'),
                         parse_session_name('projects/p1/instances/i1/databases/d1/sessions/x'))

    def test_invalid_names(self):
        for name in ['', 'topics/t1', 'projects/p1/topics/', 'projects/p1/topics/t1/extra']:
            with self.assertRaises(InvalidResourceNameError):
                parse_topic_from_topic_name(name)

        with self.assertRaises(InvalidResourceNameError):
            format_topic_name('p1', '')
