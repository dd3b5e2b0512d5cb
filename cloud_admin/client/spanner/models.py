from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from cloud_admin.rpc import messages
from cloud_admin.rpc.names import parse_session_name


class Session(BaseModel):
    """ Database session as reported by the service """
    model_config = ConfigDict(frozen=True)

    name: str
    """ Fully-qualified name, i.e., projects/{project}/instances/{instance}/databases/{database}/sessions/{session} """

    labels: Dict[str, str] = Field(default_factory=dict)
    create_time: Optional[datetime] = None
    approximate_last_use_time: Optional[datetime] = None

    @property
    def session_id(self) -> str:
        return parse_session_name(self.name)['session']

    @property
    def database(self) -> str:
        return parse_session_name(self.name)['database']

    @classmethod
    def from_pb(cls, session_pb: Optional[messages.Session]) -> Optional['Session']:
        if session_pb is None:
            return None
        return cls(name=session_pb.name,
                   labels=dict(session_pb.labels or {}),
                   create_time=session_pb.create_time,
                   approximate_last_use_time=session_pb.approximate_last_use_time)
