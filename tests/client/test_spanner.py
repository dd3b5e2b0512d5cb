from cloud_admin import ClosedServiceError, ListOption, SessionAdminClient
from cloud_admin.rpc.messages import ListSessionsRequest, ListSessionsResponse, Session as SessionPb
from tests.exam_helper import BaseClientTestCase, TEST_PROJECT

DATABASE_NAME = f'projects/{TEST_PROJECT}/instances/main/databases/orders'


class TestSessionAdminClient(BaseClientTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client = SessionAdminClient.make(self.rpc, TEST_PROJECT)

    def test_session_lifecycle(self):
        session = self.client.create_session('main', 'orders', labels={'env': 'dev'})

        self.assertTrue(session.name.startswith(DATABASE_NAME + '/sessions/'))
        self.assertEqual('orders', session.database)
        self.assertEqual({'env': 'dev'}, session.labels)
        self.assertIsNotNone(session.create_time)

        self.assertEqual(session, self.client.get_session(session.name))
        self.assertTrue(self.client.delete_session(session.name))
        self.assertIsNone(self.client.get_session(session.name))

    def test_list_sessions(self):
        created = [self.client.create_session('main', 'orders') for _ in range(3)]
        self.client.create_session('main', 'archive')

        first_page = self.client.list_sessions('main', 'orders', ListOption.page_size(2))

        self.assertEqual(2, len(first_page.values))
        self.assertTrue(first_page.has_next_page())
        self.assertEqual(sorted(s.session_id for s in created),
                         sorted(s.session_id for s in first_page.iterate_all()))

        for request in self.assert_requests(ListSessionsRequest, 2):
            self.assertEqual(DATABASE_NAME, request.database)
            self.assertEqual(2, request.page_size)

    def test_list_sessions_with_filter(self):
        self.client.create_session('main', 'orders', labels={'env': 'dev'})
        self.client.create_session('main', 'orders', labels={'env': 'prod'})
        self.client.create_session('main', 'orders', labels={'env': 'dev'})

        page = self.client.list_sessions('main', 'orders', ListOption.filter('labels.env:dev'), ListOption.page_size(1))
        sessions = list(page.iterate_all())

        self.assertEqual(2, len(sessions))
        self.assertTrue(all(session.labels == {'env': 'dev'} for session in sessions))
        for request in self.assert_requests(ListSessionsRequest, 2):
            self.assertEqual('labels.env:dev', request.filter)

    def test_absent_sessions_field(self):
        self.rpc.script_list(ListSessionsResponse(sessions=None, next_page_token='more'),
                             ListSessionsResponse(sessions=[SessionPb(name=f'{DATABASE_NAME}/sessions/s1')]))

        first_page = self.client.list_sessions('main', 'orders')
        second_page = first_page.get_next_page()

        self.assertEqual((), first_page.values)
        self.assertEqual(['s1'], [session.session_id for session in second_page.values])
        self.assertIsNone(second_page.next_page_token)

    def test_close(self):
        self.client.close()

        with self.assertRaises(ClosedServiceError):
            self.client.list_sessions('main', 'orders')
        self.assertIsInstance(self.client.create_session_async('main', 'orders').exception(), ClosedServiceError)
        self.assertEqual(1, self.rpc.close_count)
