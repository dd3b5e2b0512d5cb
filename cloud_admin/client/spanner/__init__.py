from cloud_admin.client.spanner.client import SessionAdminClient
from cloud_admin.client.spanner.models import Session
