"""
MongoDB client factory for creating database connections.
"""

import logging
from urllib.parse import quote_plus

from pymongo import MongoClient

logger = logging.getLogger(__name__)


class MongoDBClient:
    """Factory for creating MongoDB client connections."""

    def __init__(self, username: str, password: str, uri: str, app_name: str = "rerank-metrics"):
        """Initialize MongoDB client configuration."""
        self.username = username
        self.password = password
        self.uri = uri
        self.app_name = app_name

    def build_connection_string(self, base_uri: str, username: str, password: str) -> str:
        """
        Construct MongoDB URI with credentials.
        Expected format: mongodb+srv://cluster.mongodb.net/?retryWrites=true&w=majority
        """
        if "://" not in base_uri:
            raise ValueError(
                "Invalid MongoDB URI format. Expected format: mongodb+srv://cluster.mongodb.net/?retryWrites=true&w=majority")

        protocol, rest = base_uri.split("://", 1)

        # Drop credentials already embedded in the uri
        if "@" in rest:
            rest = rest.split("@", 1)[1]

        if not username:
            return f"{protocol}://{rest}"

        encoded_username = quote_plus(username)
        encoded_password = quote_plus(password or "")
        return f"{protocol}://{encoded_username}:{encoded_password}@{rest}"

    def get_client(self) -> MongoClient:
        """Create and return a new MongoDB client instance (connection pool)."""
        connection_string = self.build_connection_string(self.uri, self.username, self.password)
        logger.info(f"Creating MongoDB client (appname={self.app_name})")
        return MongoClient(connection_string, appname=self.app_name)
