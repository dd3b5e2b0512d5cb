from cloud_admin.client.exceptions import ClosedServiceError, DuplicateOptionError, InvalidOptionError, \
    RemoteCallError
from cloud_admin.client.models import ServiceOptions
from cloud_admin.client.options import ListOption, OptionMap, OptionType
from cloud_admin.client.page import Page
from cloud_admin.client.pubsub import (PubSubClient, PushConfig, Subscription, SubscriptionId, SubscriptionInfo,
                                       Topic, TopicId, TopicInfo)
from cloud_admin.client.spanner import Session, SessionAdminClient
from cloud_admin.constants import __version__
from cloud_admin.rpc.channel import RpcChannel
from cloud_admin.rpc.messages import Binding, Policy
