from concurrent.futures import Future
from typing import Dict, Optional

from cloud_admin.client.base_client import BaseServiceClient, empty_to_boolean
from cloud_admin.client.futures import wait_for
from cloud_admin.client.options import ListOption
from cloud_admin.client.page import Page
from cloud_admin.client.spanner.listings import SESSION_LISTING
from cloud_admin.client.spanner.models import Session
from cloud_admin.common.tracing import Span
from cloud_admin.rpc import messages
from cloud_admin.rpc.messages import CreateSessionRequest, DeleteSessionRequest, GetSessionRequest
from cloud_admin.rpc.names import format_database_name


class SessionAdminClient(BaseServiceClient):
    """ Administration client for database sessions

        Sessions are addressed by their fully-qualified names, as returned in ``Session.name``.
    """

    def create_session(self,
                       instance: str,
                       database: str,
                       labels: Optional[Dict[str, str]] = None,
                       trace: Optional[Span] = None) -> Session:
        return wait_for(self.create_session_async(instance, database, labels, trace=trace))

    def create_session_async(self,
                             instance: str,
                             database: str,
                             labels: Optional[Dict[str, str]] = None,
                             trace: Optional[Span] = None) -> 'Future[Session]':
        request = CreateSessionRequest(database=format_database_name(self.project_id, instance, database),
                                       session=messages.Session(labels=labels) if labels else None)
        return self._call(f'create session in {request.database}',
                          lambda rpc: rpc.create(request),
                          Session.from_pb,
                          trace)

    def get_session(self, session_name: str, trace: Optional[Span] = None) -> Optional[Session]:
        return wait_for(self.get_session_async(session_name, trace=trace))

    def get_session_async(self, session_name: str, trace: Optional[Span] = None) -> 'Future[Optional[Session]]':
        request = GetSessionRequest(name=session_name)
        return self._call(f'get session {session_name}', lambda rpc: rpc.get(request), Session.from_pb, trace)

    def delete_session(self, session_name: str, trace: Optional[Span] = None) -> bool:
        return wait_for(self.delete_session_async(session_name, trace=trace))

    def delete_session_async(self, session_name: str, trace: Optional[Span] = None) -> 'Future[bool]':
        request = DeleteSessionRequest(name=session_name)
        return self._call(f'delete session {session_name}', lambda rpc: rpc.delete(request), empty_to_boolean, trace)

    def list_sessions(self, instance: str, database: str, *options: ListOption) -> Page[Session]:
        return wait_for(self.list_sessions_async(instance, database, *options))

    def list_sessions_async(self, instance: str, database: str, *options: ListOption) -> 'Future[Page[Session]]':
        return self._list(SESSION_LISTING, format_database_name(self.project_id, instance, database), options)
