"""
MS Graph client setup with lazy initialization.
"""

from azure.identity import ClientSecretCredential
from msgraph import GraphServiceClient

from core.config import GRAPH_APP_ID, GRAPH_CLIENT_SECRET, GRAPH_TENANT_ID

_graph_client: GraphServiceClient | None = None


def get_graph_client() -> GraphServiceClient:
    """
    Get or create the MS Graph client (lazy initialization).

    Raises:
        RuntimeError: If the Graph app credentials are not configured
    """
    global _graph_client
    if _graph_client is None:
        missing = [
            name
            for name, value in (
                ("MICROSOFT_GRAPH_TENANT_ID", GRAPH_TENANT_ID),
                ("MICROSOFT_GRAPH_APP_ID", GRAPH_APP_ID),
                ("MICROSOFT_GRAPH_CLIENT_SECRET", GRAPH_CLIENT_SECRET),
            )
            if not value
        ]
        if missing:
            raise RuntimeError(f"MS Graph credentials not configured: {', '.join(missing)}")

        credential = ClientSecretCredential(
            tenant_id=GRAPH_TENANT_ID,
            client_id=GRAPH_APP_ID,
            client_secret=GRAPH_CLIENT_SECRET,
        )
        _graph_client = GraphServiceClient(
            credentials=credential,
            scopes=["https://graph.microsoft.com/.default"],
        )
    return _graph_client
