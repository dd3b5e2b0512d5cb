from cloud_admin.client.pubsub.client import PubSubClient
from cloud_admin.client.pubsub.models import (PushConfig, Subscription, SubscriptionId, SubscriptionInfo, Topic,
                                              TopicId, TopicInfo)
