from concurrent.futures import Future
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Callable, Deque, Dict, List, Optional, Set, Tuple
from collections import deque
from unittest import TestCase

from cloud_admin.client.exceptions import RemoteCallError
from cloud_admin.common.logger import get_logger
from cloud_admin.rpc.channel import RpcChannel
from cloud_admin.rpc.messages import (CreateSessionRequest, DeleteSessionRequest, DeleteSubscriptionRequest,
                                      DeleteTopicRequest, Empty, GetIamPolicyRequest, GetSessionRequest,
                                      GetSubscriptionRequest, GetTopicRequest, ListSessionsRequest,
                                      ListSessionsResponse, ListSubscriptionsRequest, ListSubscriptionsResponse,
                                      ListTopicSubscriptionsRequest, ListTopicSubscriptionsResponse,
                                      ListTopicsRequest, ListTopicsResponse, Message, ModifyPushConfigRequest,
                                      Policy, Session, SetIamPolicyRequest, Subscription,
                                      TestIamPermissionsRequest, TestIamPermissionsResponse, Topic)

_logger = get_logger('exam_helper')

TEST_PROJECT = 'test-project'


class FakeRpcChannel(RpcChannel):
    """ In-process channel backed by dictionaries

        Every request is recorded in ``requests``. Listing responses can be scripted with ``script_list`` and
        failures with ``fail_next``. In deferred mode, futures stay pending until ``resolve_all`` is called.
    """

    def __init__(self, deferred: bool = False):
        self.__lock = Lock()
        self.deferred = deferred
        self.requests: List[Message] = []
        self.close_count = 0

        self.topics: Dict[str, Topic] = dict()
        self.subscriptions: Dict[str, Subscription] = dict()
        self.sessions: Dict[str, Session] = dict()
        self.policies: Dict[str, Policy] = dict()
        self.held_permissions: Dict[str, Set[str]] = dict()

        self.__scripted_list_responses: Deque[Any] = deque()
        self.__failures: Deque[BaseException] = deque()
        self.__pending: List[Tuple[Future, Callable[[], Any]]] = []
        self.__session_counter = 0

    # Test controls

    def script_list(self, *responses: Any):
        self.__scripted_list_responses.extend(responses)

    def fail_next(self, error: BaseException):
        self.__failures.append(error)

    def grant(self, resource: str, *permissions: str):
        self.held_permissions.setdefault(resource, set()).update(permissions)

    def resolve_all(self):
        with self.__lock:
            pending = list(self.__pending)
            self.__pending.clear()
        for future, compute in pending:
            self.__settle(future, compute)

    @property
    def pending_count(self) -> int:
        return len(self.__pending)

    # RpcChannel

    def create(self, request):
        if isinstance(request, Topic):
            return self.__respond(request, lambda: self.__store(self.topics, request.name, request))
        elif isinstance(request, Subscription):
            return self.__respond(request, lambda: self.__store(self.subscriptions, request.name, request))
        elif isinstance(request, CreateSessionRequest):
            return self.__respond(request, lambda: self.__create_session(request))
        raise NotImplementedError(type(request).__name__)

    def get(self, request):
        if isinstance(request, GetTopicRequest):
            return self.__respond(request, lambda: self.topics.get(request.topic))
        elif isinstance(request, GetSubscriptionRequest):
            return self.__respond(request, lambda: self.subscriptions.get(request.subscription))
        elif isinstance(request, GetSessionRequest):
            return self.__respond(request, lambda: self.sessions.get(request.name))
        raise NotImplementedError(type(request).__name__)

    def delete(self, request):
        if isinstance(request, DeleteTopicRequest):
            return self.__respond(request, lambda: self.__remove(self.topics, request.topic))
        elif isinstance(request, DeleteSubscriptionRequest):
            return self.__respond(request, lambda: self.__remove(self.subscriptions, request.subscription))
        elif isinstance(request, DeleteSessionRequest):
            return self.__respond(request, lambda: self.__remove(self.sessions, request.name))
        raise NotImplementedError(type(request).__name__)

    def list(self, request):
        return self.__respond(request, lambda: self.__list(request))

    def modify(self, request: ModifyPushConfigRequest):
        def _modify():
            subscription = self.subscriptions.get(request.subscription)
            if subscription is None:
                raise RemoteCallError(f'{request.subscription} not found', code='NOT_FOUND')
            self.subscriptions[request.subscription] = subscription.model_copy(
                update=dict(push_config=request.push_config)
            )
            return Empty()

        return self.__respond(request, _modify)

    def get_iam_policy(self, request: GetIamPolicyRequest):
        return self.__respond(request, lambda: self.policies.get(request.resource, Policy()))

    def set_iam_policy(self, request: SetIamPolicyRequest):
        def _set():
            policy = request.policy.model_copy(update=dict(etag=f'etag-{len(self.requests)}'))
            self.policies[request.resource] = policy
            return policy

        return self.__respond(request, _set)

    def test_iam_permissions(self, request: TestIamPermissionsRequest):
        def _test():
            held = self.held_permissions.get(request.resource, set())
            # Report the held subset in reverse order to make sure that nobody relies on the order.
            return TestIamPermissionsResponse(
                permissions=sorted([p for p in request.permissions if p in held], reverse=True)
            )

        return self.__respond(request, _test)

    def close(self):
        self.close_count += 1

    # Internals

    def __respond(self, request: Message, compute: Callable[[], Any]) -> Future:
        future: Future = Future()

        with self.__lock:
            self.requests.append(request)
            failure = self.__failures.popleft() if self.__failures else None

            if failure is not None:
                def compute():
                    raise failure

            if self.deferred:
                self.__pending.append((future, compute))
                return future

        self.__settle(future, compute)

        return future

    @staticmethod
    def __settle(future: Future, compute: Callable[[], Any]):
        try:
            result = compute()
        except BaseException as e:
            future.set_exception(e)
        else:
            future.set_result(result)

    @staticmethod
    def __store(storage: Dict[str, Any], name: str, record: Any):
        if name in storage:
            raise RemoteCallError(f'{name} already exists', code='ALREADY_EXISTS')
        storage[name] = record
        return record

    @staticmethod
    def __remove(storage: Dict[str, Any], name: str):
        if name not in storage:
            raise RemoteCallError(f'{name} not found', code='NOT_FOUND')
        del storage[name]
        return Empty()

    def __create_session(self, request: CreateSessionRequest) -> Session:
        self.__session_counter += 1
        session = Session(name=f'{request.database}/sessions/session-{self.__session_counter}',
                          labels=request.session.labels if request.session else None,
                          create_time=datetime.now(timezone.utc))
        self.sessions[session.name] = session
        return session

    def __list(self, request: Any):
        if self.__scripted_list_responses:
            return self.__scripted_list_responses.popleft()

        if isinstance(request, ListTopicsRequest):
            names = [name for name in self.topics if name.startswith(request.project + '/')]
            values, token = self.__slice(sorted(names), request.page_size, request.page_token)
            return ListTopicsResponse(topics=[self.topics[name] for name in values], next_page_token=token)
        elif isinstance(request, ListSubscriptionsRequest):
            names = [name for name in self.subscriptions if name.startswith(request.project + '/')]
            values, token = self.__slice(sorted(names), request.page_size, request.page_token)
            return ListSubscriptionsResponse(subscriptions=[self.subscriptions[name] for name in values],
                                             next_page_token=token)
        elif isinstance(request, ListTopicSubscriptionsRequest):
            names = [name for name, subscription in self.subscriptions.items() if subscription.topic == request.topic]
            values, token = self.__slice(sorted(names), request.page_size, request.page_token)
            return ListTopicSubscriptionsResponse(subscriptions=values, next_page_token=token)
        elif isinstance(request, ListSessionsRequest):
            names = [
                name
                for name, session in self.sessions.items()
                if name.startswith(request.database + '/') and self.__match_session(session, request.filter)
            ]
            values, token = self.__slice(sorted(names), request.page_size, request.page_token)
            return ListSessionsResponse(sessions=[self.sessions[name] for name in values], next_page_token=token)

        raise NotImplementedError(type(request).__name__)

    @staticmethod
    def __slice(names: List[str], page_size: int, page_token: str) -> Tuple[List[str], str]:
        offset = int(page_token) if page_token else 0
        end = offset + page_size if page_size else len(names)
        return names[offset:end], (str(end) if end < len(names) else '')

    @staticmethod
    def __match_session(session: Session, expression: str) -> bool:
        # Only "labels.<key>:<value>" is supported.
        if not expression:
            return True
        key, value = expression[len('labels.'):].split(':', 1)
        return (session.labels or {}).get(key) == value


class BaseClientTestCase(TestCase):
    """ Base test case with a fresh fake channel per test """
    deferred = False

    def setUp(self) -> None:
        super().setUp()
        self.rpc = FakeRpcChannel(deferred=self.deferred)
        _logger.debug(f'{type(self).__name__}.{self._testMethodName}: ready')

    def assert_requests(self, expected_type: type, count: Optional[int] = None) -> List[Any]:
        requests = [r for r in self.rpc.requests if isinstance(r, expected_type)]
        if count is not None:
            self.assertEqual(count, len(requests), f'Unexpected number of {expected_type.__name__}')
        return requests
