"""
Platform API access: the GraphQL client and the query catalog.
"""

from pdq.api.client import GraphQLClient, RemoteFetchAdapter
from pdq.api.queries import document_for

__all__ = [
    "GraphQLClient",
    "RemoteFetchAdapter",
    "document_for",
]
