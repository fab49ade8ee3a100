"""
MS Graph client setup with lazy initialization.
"""

from azure.identity import ClientSecretCredential
from msgraph import GraphServiceClient

from core.config import GRAPH_APP_ID, GRAPH_CLIENT_SECRET, GRAPH_TENANT_ID

GRAPH_SCOPES = ["https://graph.microsoft.com/.default"]

_graph_client: GraphServiceClient | None = None


def get_graph_client() -> GraphServiceClient:
    """Get or create the MS Graph client used for free/busy lookups."""
    global _graph_client
    if _graph_client is None:
        if not (GRAPH_TENANT_ID and GRAPH_APP_ID and GRAPH_CLIENT_SECRET):
            raise RuntimeError(
                "MS Graph credentials missing. Set MICROSOFT_GRAPH_TENANT_ID, "
                "MICROSOFT_GRAPH_APP_ID and MICROSOFT_GRAPH_CLIENT_SECRET."
            )
        credential = ClientSecretCredential(
            tenant_id=GRAPH_TENANT_ID,
            client_id=GRAPH_APP_ID,
            client_secret=GRAPH_CLIENT_SECRET,
        )
        _graph_client = GraphServiceClient(credentials=credential, scopes=GRAPH_SCOPES)
    return _graph_client
