from typing import Optional

from pydantic import BaseModel, ConfigDict

from cloud_admin.common.environments import env
from cloud_admin.rpc.channel import RpcChannel


class ServiceOptions(BaseModel):
    """ Service binding shared by every call of one client """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    project_id: str
    """ Project owning the resources """

    rpc: RpcChannel
    """ Channel to the remote service """

    @classmethod
    def make(cls, rpc: RpcChannel, project_id: Optional[str] = None) -> 'ServiceOptions':
        """ Create the options, falling back to the CLOUD_ADMIN_PROJECT_ID environment variable for the project """
        return cls(
            project_id=project_id or env('CLOUD_ADMIN_PROJECT_ID',
                                         required=True,
                                         hint='or give the project ID explicitly',
                                         description='Default project ID'),
            rpc=rpc,
        )
