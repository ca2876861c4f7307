"""Environment settings."""

import os
from typing import Dict, Optional


class Settings:
    """Exporter settings from environment variables."""

    NODE_URL = "COUCHBASE_NODE_URL"
    NODE_NAME = "COUCHBASE_NODE_NAME"
    LOG_LEVEL = "LOG_LEVEL"

    @staticmethod
    def get(key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get environment variable value.

        Empty values are treated as unset.

        Args:
            key: Environment variable name
            default: Default value if not set

        Returns:
            Optional[str]: Environment variable value or default
        """
        value = os.getenv(key)
        return value if value else default

    @classmethod
    def overrides(cls) -> Dict[str, Dict[str, Optional[str]]]:
        """
        Configuration overrides taken from the environment.

        Returns:
            Dict: Section -> field -> value (None when unset)
        """
        return {
            "node": {
                "url": cls.get(cls.NODE_URL),
                "name": cls.get(cls.NODE_NAME),
            },
            "logging": {
                "level": cls.get(cls.LOG_LEVEL),
            },
        }
