""" Request builders and listing descriptions for topics and subscriptions """
from typing import Optional

from cloud_admin.client.options import OptionMap, OptionType
from cloud_admin.client.page import ListingSpec
from cloud_admin.client.pubsub.models import Subscription, SubscriptionId, Topic
from cloud_admin.rpc.messages import (ListSubscriptionsRequest, ListSubscriptionsResponse,
                                      ListTopicSubscriptionsRequest, ListTopicSubscriptionsResponse,
                                      ListTopicsRequest, ListTopicsResponse)
from cloud_admin.rpc.names import format_project_name, format_topic_name


def _paging_fields(options: OptionMap):
    fields = dict()
    page_size = options.get(OptionType.PAGE_SIZE)
    page_token = options.get(OptionType.PAGE_TOKEN)
    if page_size is not None:
        fields['page_size'] = page_size
    if page_token is not None:
        fields['page_token'] = page_token
    return fields


def list_topics_request(project_id: str, parent: Optional[str], options: OptionMap) -> ListTopicsRequest:
    return ListTopicsRequest(project=format_project_name(project_id), **_paging_fields(options))


def list_subscriptions_request(project_id: str,
                               parent: Optional[str],
                               options: OptionMap) -> ListSubscriptionsRequest:
    return ListSubscriptionsRequest(project=format_project_name(project_id), **_paging_fields(options))


def list_topic_subscriptions_request(project_id: str,
                                     parent: Optional[str],
                                     options: OptionMap) -> ListTopicSubscriptionsRequest:
    """ ``parent`` is the short name of the topic """
    return ListTopicSubscriptionsRequest(topic=format_topic_name(project_id, parent), **_paging_fields(options))


def _topics_from_response(response: ListTopicsResponse):
    topics = None if response.topics is None else [Topic.from_pb(topic) for topic in response.topics]
    return topics, response.next_page_token


def _subscriptions_from_response(response: ListSubscriptionsResponse):
    subscriptions = None if response.subscriptions is None \
        else [Subscription.from_pb(subscription) for subscription in response.subscriptions]
    return subscriptions, response.next_page_token


def _subscription_ids_from_response(response: ListTopicSubscriptionsResponse):
    subscription_ids = None if response.subscriptions is None \
        else [SubscriptionId.from_pb(name) for name in response.subscriptions]
    return subscription_ids, response.next_page_token


TOPIC_LISTING = ListingSpec(
    name='topics',
    build_request=list_topics_request,
    invoke=lambda rpc, request: rpc.list(request),
    unmarshal=_topics_from_response,
)

SUBSCRIPTION_LISTING = ListingSpec(
    name='subscriptions',
    build_request=list_subscriptions_request,
    invoke=lambda rpc, request: rpc.list(request),
    unmarshal=_subscriptions_from_response,
)

TOPIC_SUBSCRIPTION_LISTING = ListingSpec(
    name='topic-subscriptions',
    build_request=list_topic_subscriptions_request,
    invoke=lambda rpc, request: rpc.list(request),
    unmarshal=_subscription_ids_from_response,
)
