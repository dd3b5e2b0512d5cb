from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cloud_admin.rpc import messages
from cloud_admin.rpc.names import (format_subscription_name, format_topic_name,
                                   parse_project_from_subscription_name, parse_project_from_topic_name,
                                   parse_subscription_from_subscription_name, parse_topic_from_topic_name)

DELETED_TOPIC_NAME = '_deleted-topic_'
""" Topic name reported for a subscription whose topic has been deleted """


class TopicId(BaseModel):
    """ Reference to a topic, possibly in another project """
    model_config = ConfigDict(frozen=True)

    project: Optional[str] = None
    """ Project of the topic. If not set, the project of the client is used. """

    topic: str

    @property
    def deleted(self) -> bool:
        return self.topic == DELETED_TOPIC_NAME

    @classmethod
    def of(cls, topic: str, project: Optional[str] = None) -> 'TopicId':
        return cls(project=project, topic=topic)

    @classmethod
    def deleted_topic(cls) -> 'TopicId':
        return cls(topic=DELETED_TOPIC_NAME)

    def to_pb(self, default_project: str) -> str:
        if self.deleted:
            return DELETED_TOPIC_NAME
        return format_topic_name(self.project or default_project, self.topic)

    @classmethod
    def from_pb(cls, topic_name: str) -> 'TopicId':
        if topic_name == DELETED_TOPIC_NAME:
            return cls.deleted_topic()
        return cls(project=parse_project_from_topic_name(topic_name), topic=parse_topic_from_topic_name(topic_name))


class TopicInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    """ Short name of the topic, e.g., "my-topic" """

    @classmethod
    def of(cls, name: str) -> 'TopicInfo':
        return cls(name=name)

    def to_pb(self, project_id: str) -> messages.Topic:
        return messages.Topic(name=format_topic_name(project_id, self.name))


class Topic(TopicInfo):
    """ Topic as reported by the service """

    @classmethod
    def from_pb(cls, topic_pb: Optional[messages.Topic]) -> Optional['Topic']:
        if topic_pb is None:
            return None
        return cls(name=parse_topic_from_topic_name(topic_pb.name))


class PushConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    endpoint: str
    """ URL the messages are pushed to """

    attributes: Dict[str, str] = Field(default_factory=dict)

    def to_pb(self) -> messages.PushConfig:
        return messages.PushConfig(push_endpoint=self.endpoint, attributes=dict(self.attributes))

    @classmethod
    def from_pb(cls, push_config_pb: Optional[messages.PushConfig]) -> Optional['PushConfig']:
        # A push config without an endpoint means pull delivery.
        if push_config_pb is None or not push_config_pb.push_endpoint:
            return None
        return cls(endpoint=push_config_pb.push_endpoint, attributes=dict(push_config_pb.attributes or {}))


class SubscriptionInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    """ Short name of the subscription """

    topic: TopicId

    push_config: Optional[PushConfig] = None
    """ Push delivery settings. If not set, messages are pulled. """

    ack_deadline_seconds: int = 0
    """ Acknowledgement deadline. Zero lets the service apply its default. """

    @field_validator('topic', mode='before')
    @classmethod
    def accept_topic_name(cls, value: Any):
        return TopicId.of(value) if isinstance(value, str) else value

    @classmethod
    def of(cls, topic: Union[str, TopicId], name: str) -> 'SubscriptionInfo':
        return cls(name=name, topic=topic)

    def to_pb(self, project_id: str) -> messages.Subscription:
        return messages.Subscription(
            name=format_subscription_name(project_id, self.name),
            topic=self.topic.to_pb(project_id),
            push_config=self.push_config.to_pb() if self.push_config else None,
            ack_deadline_seconds=self.ack_deadline_seconds,
        )


class Subscription(SubscriptionInfo):
    """ Subscription as reported by the service """

    @classmethod
    def from_pb(cls, subscription_pb: Optional[messages.Subscription]) -> Optional['Subscription']:
        if subscription_pb is None:
            return None
        return cls(
            name=parse_subscription_from_subscription_name(subscription_pb.name),
            topic=TopicId.from_pb(subscription_pb.topic),
            push_config=PushConfig.from_pb(subscription_pb.push_config),
            ack_deadline_seconds=subscription_pb.ack_deadline_seconds,
        )


class SubscriptionId(BaseModel):
    """ Identity of a subscription attached to a topic """
    model_config = ConfigDict(frozen=True)

    project: str
    subscription: str

    @classmethod
    def from_pb(cls, subscription_name: str) -> 'SubscriptionId':
        return cls(project=parse_project_from_subscription_name(subscription_name),
                   subscription=parse_subscription_from_subscription_name(subscription_name))
