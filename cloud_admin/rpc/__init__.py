from cloud_admin.rpc.channel import RpcChannel
from cloud_admin.rpc.names import (InvalidResourceNameError, format_database_name, format_project_name,
                                   format_session_name, format_subscription_name, format_topic_name)
