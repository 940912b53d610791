"""Runtime environments.

- DEVELOPMENT: local development, human-readable logs
- TESTING: automated test runs
- CI: continuous integration
- PRODUCTION: deployed service
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
