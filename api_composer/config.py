"""
Runtime configuration for API Composer.

Values are module-level constants, each overridable through an
environment variable so deployments can point at another database or
tune the outgoing request timeout without code changes.
"""

import os

# SQLAlchemy URL of the blob store backing history, environments and saved requests
DATABASE_URL = os.environ.get("API_COMPOSER_DATABASE_URL", "sqlite:///./api_composer.db")

# Timeout in seconds applied to every outgoing request
REQUEST_TIMEOUT = float(os.environ.get("API_COMPOSER_REQUEST_TIMEOUT", "30"))

LOG_LEVEL = os.environ.get("API_COMPOSER_LOG_LEVEL", "INFO")

# Maximum number of history entries kept (newest first)
HISTORY_LIMIT = 25

# Storage keys of the three persisted collections
HISTORY_STORAGE_KEY = "postman_clone_history_v1"
ENV_STORAGE_KEY = "postman_clone_envs_v1"
COLLECTION_STORAGE_KEY = "postman_clone_saved_requests_v1"
