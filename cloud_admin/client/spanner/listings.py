from typing import Optional

from cloud_admin.client.options import OptionMap, OptionType
from cloud_admin.client.page import PAGING_OPTIONS, ListingSpec
from cloud_admin.client.spanner.models import Session
from cloud_admin.rpc.messages import ListSessionsRequest, ListSessionsResponse


def list_sessions_request(project_id: str, parent: Optional[str], options: OptionMap) -> ListSessionsRequest:
    """ ``parent`` is the fully-qualified database name """
    fields = dict()
    for option_type, field_name in [(OptionType.PAGE_SIZE, 'page_size'),
                                    (OptionType.PAGE_TOKEN, 'page_token'),
                                    (OptionType.FILTER, 'filter')]:
        value = options.get(option_type)
        if value is not None:
            fields[field_name] = value
    return ListSessionsRequest(database=parent, **fields)


def _sessions_from_response(response: ListSessionsResponse):
    sessions = None if response.sessions is None else [Session.from_pb(session) for session in response.sessions]
    return sessions, response.next_page_token


SESSION_LISTING = ListingSpec(
    name='sessions',
    build_request=list_sessions_request,
    invoke=lambda rpc, request: rpc.list(request),
    unmarshal=_sessions_from_response,
    accepted_options=PAGING_OPTIONS | {OptionType.FILTER},
)
