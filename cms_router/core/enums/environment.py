"""Application environment types.

Used by Settings to determine environment-specific behavior
(log renderer selection, debug output).

Environments:
- DEVELOPMENT: Local development, human-readable logs
- TESTING: Automated test execution
- CI: Continuous integration environment
- PRODUCTION: Deployed behind a host server, JSON logs
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
