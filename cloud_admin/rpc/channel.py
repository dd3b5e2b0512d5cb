from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import Union

from cloud_admin.rpc.messages import (CreateSessionRequest, DeleteSessionRequest, DeleteSubscriptionRequest,
                                      DeleteTopicRequest, Empty, GetIamPolicyRequest, GetSessionRequest,
                                      GetSubscriptionRequest, GetTopicRequest, ListSessionsRequest,
                                      ListSessionsResponse, ListSubscriptionsRequest, ListSubscriptionsResponse,
                                      ListTopicSubscriptionsRequest, ListTopicSubscriptionsResponse,
                                      ListTopicsRequest, ListTopicsResponse, ModifyPushConfigRequest, Policy, Session,
                                      SetIamPolicyRequest, Subscription, TestIamPermissionsRequest,
                                      TestIamPermissionsResponse, Topic)

CreateRequest = Union[Topic, Subscription, CreateSessionRequest]
GetRequest = Union[GetTopicRequest, GetSubscriptionRequest, GetSessionRequest]
DeleteRequest = Union[DeleteTopicRequest, DeleteSubscriptionRequest, DeleteSessionRequest]
ListRequest = Union[ListTopicsRequest, ListSubscriptionsRequest, ListTopicSubscriptionsRequest, ListSessionsRequest]
ListResponse = Union[ListTopicsResponse, ListSubscriptionsResponse, ListTopicSubscriptionsResponse,
                     ListSessionsResponse]


class RpcChannel(ABC):
    """ Remote procedure call channel

        Every call returns a future resolved by the transport, either with the response record or with the failure
        raised by the transport. The operation is selected by the type of the request record, e.g., ``list`` with a
        ``ListTopicsRequest`` resolves to a ``ListTopicsResponse``.

        Implementations must accept concurrent calls from multiple threads. ``get`` resolves to ``None`` when the
        requested resource does not exist.
    """

    @abstractmethod
    def create(self, request: CreateRequest) -> 'Future[Union[Topic, Subscription, Session]]':
        raise NotImplementedError()

    @abstractmethod
    def get(self, request: GetRequest) -> 'Future[Union[Topic, Subscription, Session, None]]':
        raise NotImplementedError()

    @abstractmethod
    def delete(self, request: DeleteRequest) -> 'Future[Empty]':
        raise NotImplementedError()

    @abstractmethod
    def list(self, request: ListRequest) -> 'Future[ListResponse]':
        raise NotImplementedError()

    @abstractmethod
    def modify(self, request: ModifyPushConfigRequest) -> 'Future[Empty]':
        raise NotImplementedError()

    @abstractmethod
    def get_iam_policy(self, request: GetIamPolicyRequest) -> 'Future[Policy]':
        raise NotImplementedError()

    @abstractmethod
    def set_iam_policy(self, request: SetIamPolicyRequest) -> 'Future[Policy]':
        raise NotImplementedError()

    @abstractmethod
    def test_iam_permissions(self, request: TestIamPermissionsRequest) -> 'Future[TestIamPermissionsResponse]':
        raise NotImplementedError()

    @abstractmethod
    def close(self):
        raise NotImplementedError()
