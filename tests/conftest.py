import os

# Must be set before the application context loads config.yaml
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ["LOG_FILE"] = ""
os.environ.setdefault("TEST_DATABASE_URL", "sqlite://")

from tests.fixtures import *  # noqa: E402,F401,F403
