from concurrent.futures import Future
from typing import List, Optional, Sequence, Union

from cloud_admin.client.base_client import (BaseServiceClient, empty_to_boolean, empty_to_none,
                                            permissions_from_pb, policy_from_pb)
from cloud_admin.client.futures import wait_for
from cloud_admin.client.options import ListOption
from cloud_admin.client.page import Page
from cloud_admin.client.pubsub.listings import SUBSCRIPTION_LISTING, TOPIC_LISTING, TOPIC_SUBSCRIPTION_LISTING
from cloud_admin.client.pubsub.models import PushConfig, Subscription, SubscriptionId, SubscriptionInfo, Topic, \
    TopicInfo
from cloud_admin.common.tracing import Span
from cloud_admin.rpc.messages import (DeleteSubscriptionRequest, DeleteTopicRequest, GetIamPolicyRequest,
                                      GetSubscriptionRequest, GetTopicRequest, ModifyPushConfigRequest, Policy,
                                      SetIamPolicyRequest, TestIamPermissionsRequest)
from cloud_admin.rpc.messages import PushConfig as PushConfigPb
from cloud_admin.rpc.names import format_subscription_name, format_topic_name


class PubSubClient(BaseServiceClient):
    """ Administration client for topics and subscriptions """

    def _topic_name(self, topic: str) -> str:
        return format_topic_name(self.project_id, topic)

    def _subscription_name(self, subscription: str) -> str:
        return format_subscription_name(self.project_id, subscription)

    # Topics

    def create_topic(self, topic: Union[TopicInfo, str], trace: Optional[Span] = None) -> Topic:
        return wait_for(self.create_topic_async(topic, trace=trace))

    def create_topic_async(self, topic: Union[TopicInfo, str], trace: Optional[Span] = None) -> 'Future[Topic]':
        topic_info = TopicInfo.of(topic) if isinstance(topic, str) else topic
        return self._call(f'create topic {topic_info.name}',
                          lambda rpc: rpc.create(topic_info.to_pb(self.project_id)),
                          Topic.from_pb,
                          trace)

    def get_topic(self, topic: str, trace: Optional[Span] = None) -> Optional[Topic]:
        """ Get a topic by name, or None if the topic does not exist """
        return wait_for(self.get_topic_async(topic, trace=trace))

    def get_topic_async(self, topic: str, trace: Optional[Span] = None) -> 'Future[Optional[Topic]]':
        request = GetTopicRequest(topic=self._topic_name(topic))
        return self._call(f'get topic {topic}', lambda rpc: rpc.get(request), Topic.from_pb, trace)

    def delete_topic(self, topic: str, trace: Optional[Span] = None) -> bool:
        return wait_for(self.delete_topic_async(topic, trace=trace))

    def delete_topic_async(self, topic: str, trace: Optional[Span] = None) -> 'Future[bool]':
        request = DeleteTopicRequest(topic=self._topic_name(topic))
        return self._call(f'delete topic {topic}', lambda rpc: rpc.delete(request), empty_to_boolean, trace)

    def list_topics(self, *options: ListOption) -> Page[Topic]:
        return wait_for(self.list_topics_async(*options))

    def list_topics_async(self, *options: ListOption) -> 'Future[Page[Topic]]':
        return self._list(TOPIC_LISTING, None, options)

    # Subscriptions

    def create_subscription(self, subscription: SubscriptionInfo, trace: Optional[Span] = None) -> Subscription:
        return wait_for(self.create_subscription_async(subscription, trace=trace))

    def create_subscription_async(self,
                                  subscription: SubscriptionInfo,
                                  trace: Optional[Span] = None) -> 'Future[Subscription]':
        return self._call(f'create subscription {subscription.name}',
                          lambda rpc: rpc.create(subscription.to_pb(self.project_id)),
                          Subscription.from_pb,
                          trace)

    def get_subscription(self, subscription: str, trace: Optional[Span] = None) -> Optional[Subscription]:
        """ Get a subscription by name, or None if the subscription does not exist """
        return wait_for(self.get_subscription_async(subscription, trace=trace))

    def get_subscription_async(self,
                               subscription: str,
                               trace: Optional[Span] = None) -> 'Future[Optional[Subscription]]':
        request = GetSubscriptionRequest(subscription=self._subscription_name(subscription))
        return self._call(f'get subscription {subscription}',
                          lambda rpc: rpc.get(request),
                          Subscription.from_pb,
                          trace)

    def replace_push_config(self,
                            subscription: str,
                            push_config: Optional[PushConfig],
                            trace: Optional[Span] = None) -> None:
        """ Replace the push settings of a subscription. Setting ``push_config`` to None switches it to pull. """
        wait_for(self.replace_push_config_async(subscription, push_config, trace=trace))

    def replace_push_config_async(self,
                                  subscription: str,
                                  push_config: Optional[PushConfig],
                                  trace: Optional[Span] = None) -> 'Future[None]':
        request = ModifyPushConfigRequest(
            subscription=self._subscription_name(subscription),
            push_config=push_config.to_pb() if push_config else PushConfigPb(),
        )
        return self._call(f'replace push config of {subscription}',
                          lambda rpc: rpc.modify(request),
                          empty_to_none,
                          trace)

    def delete_subscription(self, subscription: str, trace: Optional[Span] = None) -> bool:
        return wait_for(self.delete_subscription_async(subscription, trace=trace))

    def delete_subscription_async(self, subscription: str, trace: Optional[Span] = None) -> 'Future[bool]':
        request = DeleteSubscriptionRequest(subscription=self._subscription_name(subscription))
        return self._call(f'delete subscription {subscription}',
                          lambda rpc: rpc.delete(request),
                          empty_to_boolean,
                          trace)

    def list_subscriptions(self, *options: ListOption) -> Page[Subscription]:
        return wait_for(self.list_subscriptions_async(*options))

    def list_subscriptions_async(self, *options: ListOption) -> 'Future[Page[Subscription]]':
        return self._list(SUBSCRIPTION_LISTING, None, options)

    def list_topic_subscriptions(self, topic: str, *options: ListOption) -> Page[SubscriptionId]:
        """ List the identities of the subscriptions attached to the given topic """
        return wait_for(self.list_topic_subscriptions_async(topic, *options))

    def list_topic_subscriptions_async(self, topic: str, *options: ListOption) -> 'Future[Page[SubscriptionId]]':
        return self._list(TOPIC_SUBSCRIPTION_LISTING, topic, options)

    # Access policies

    def get_topic_policy(self, topic: str, trace: Optional[Span] = None) -> Optional[Policy]:
        return wait_for(self.get_topic_policy_async(topic, trace=trace))

    def get_topic_policy_async(self, topic: str, trace: Optional[Span] = None) -> 'Future[Optional[Policy]]':
        return self._get_policy(self._topic_name(topic), trace)

    def replace_topic_policy(self, topic: str, policy: Policy, trace: Optional[Span] = None) -> Policy:
        return wait_for(self.replace_topic_policy_async(topic, policy, trace=trace))

    def replace_topic_policy_async(self, topic: str, policy: Policy, trace: Optional[Span] = None) -> 'Future[Policy]':
        return self._replace_policy(self._topic_name(topic), policy, trace)

    def test_topic_permissions(self,
                               topic: str,
                               permissions: Sequence[str],
                               trace: Optional[Span] = None) -> List[bool]:
        """ Check which of the given permissions the caller holds on a topic, in the order given """
        return wait_for(self.test_topic_permissions_async(topic, permissions, trace=trace))

    def test_topic_permissions_async(self,
                                     topic: str,
                                     permissions: Sequence[str],
                                     trace: Optional[Span] = None) -> 'Future[List[bool]]':
        return self._test_permissions(self._topic_name(topic), permissions, trace)

    def get_subscription_policy(self, subscription: str, trace: Optional[Span] = None) -> Optional[Policy]:
        return wait_for(self.get_subscription_policy_async(subscription, trace=trace))

    def get_subscription_policy_async(self,
                                      subscription: str,
                                      trace: Optional[Span] = None) -> 'Future[Optional[Policy]]':
        return self._get_policy(self._subscription_name(subscription), trace)

    def replace_subscription_policy(self, subscription: str, policy: Policy, trace: Optional[Span] = None) -> Policy:
        return wait_for(self.replace_subscription_policy_async(subscription, policy, trace=trace))

    def replace_subscription_policy_async(self,
                                          subscription: str,
                                          policy: Policy,
                                          trace: Optional[Span] = None) -> 'Future[Policy]':
        return self._replace_policy(self._subscription_name(subscription), policy, trace)

    def test_subscription_permissions(self,
                                      subscription: str,
                                      permissions: Sequence[str],
                                      trace: Optional[Span] = None) -> List[bool]:
        """ Check which of the given permissions the caller holds on a subscription, in the order given """
        return wait_for(self.test_subscription_permissions_async(subscription, permissions, trace=trace))

    def test_subscription_permissions_async(self,
                                            subscription: str,
                                            permissions: Sequence[str],
                                            trace: Optional[Span] = None) -> 'Future[List[bool]]':
        return self._test_permissions(self._subscription_name(subscription), permissions, trace)

    def _get_policy(self, resource: str, trace: Optional[Span]) -> 'Future[Optional[Policy]]':
        request = GetIamPolicyRequest(resource=resource)
        return self._call(f'get policy of {resource}', lambda rpc: rpc.get_iam_policy(request), policy_from_pb, trace)

    def _replace_policy(self, resource: str, policy: Policy, trace: Optional[Span]) -> 'Future[Policy]':
        request = SetIamPolicyRequest(resource=resource, policy=policy)
        return self._call(f'replace policy of {resource}',
                          lambda rpc: rpc.set_iam_policy(request),
                          policy_from_pb,
                          trace)

    def _test_permissions(self,
                          resource: str,
                          permissions: Sequence[str],
                          trace: Optional[Span]) -> 'Future[List[bool]]':
        request = TestIamPermissionsRequest(resource=resource, permissions=list(permissions))
        return self._call(f'test permissions on {resource}',
                          lambda rpc: rpc.test_iam_permissions(request),
                          permissions_from_pb(permissions),
                          trace)
