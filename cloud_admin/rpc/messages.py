""" Wire records exchanged with the remote service

    These mirror the request/response messages produced by the marshalling layer. Scalar fields carry the wire
    defaults (empty string, zero) while repeated and nested fields may be absent (None), as a decoder is allowed to
    omit them.
"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)


class Empty(Message):
    """ Content-less response """


# Publish/subscribe resources

class Topic(Message):
    name: str = ''


class PushConfig(Message):
    push_endpoint: str = ''
    attributes: Optional[Dict[str, str]] = None


class Subscription(Message):
    name: str = ''
    topic: str = ''
    push_config: Optional[PushConfig] = None
    ack_deadline_seconds: int = 0


class GetTopicRequest(Message):
    topic: str


class DeleteTopicRequest(Message):
    topic: str


class ListTopicsRequest(Message):
    project: str
    page_size: int = 0
    page_token: str = ''


class ListTopicsResponse(Message):
    topics: Optional[List[Topic]] = None
    next_page_token: str = ''


class GetSubscriptionRequest(Message):
    subscription: str


class DeleteSubscriptionRequest(Message):
    subscription: str


class ModifyPushConfigRequest(Message):
    subscription: str
    push_config: PushConfig = Field(default_factory=PushConfig)


class ListSubscriptionsRequest(Message):
    project: str
    page_size: int = 0
    page_token: str = ''


class ListSubscriptionsResponse(Message):
    subscriptions: Optional[List[Subscription]] = None
    next_page_token: str = ''


class ListTopicSubscriptionsRequest(Message):
    topic: str
    page_size: int = 0
    page_token: str = ''


class ListTopicSubscriptionsResponse(Message):
    subscriptions: Optional[List[str]] = None
    """ Fully-qualified subscription names """

    next_page_token: str = ''


# Access policies

class Binding(Message):
    role: str
    members: Optional[List[str]] = None


class Policy(Message):
    version: int = 0
    bindings: Optional[List[Binding]] = None
    etag: str = ''


class GetIamPolicyRequest(Message):
    resource: str


class SetIamPolicyRequest(Message):
    resource: str
    policy: Policy


class TestIamPermissionsRequest(Message):
    __test__ = False

    resource: str
    permissions: List[str] = Field(default_factory=list)


class TestIamPermissionsResponse(Message):
    __test__ = False

    permissions: Optional[List[str]] = None
    """ The subset of the requested permissions that the caller holds, in no particular order """


# Database sessions

class Session(Message):
    name: str = ''
    labels: Optional[Dict[str, str]] = None
    create_time: Optional[datetime] = None
    approximate_last_use_time: Optional[datetime] = None


class CreateSessionRequest(Message):
    database: str
    session: Optional[Session] = None


class GetSessionRequest(Message):
    name: str


class DeleteSessionRequest(Message):
    name: str


class ListSessionsRequest(Message):
    database: str
    page_size: int = 0
    page_token: str = ''
    filter: str = ''


class ListSessionsResponse(Message):
    sessions: Optional[List[Session]] = None
    next_page_token: str = ''
