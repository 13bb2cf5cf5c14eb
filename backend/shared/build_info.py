"""Build metadata reported by the health endpoint.

APP_VERSION and GIT_COMMIT are injected as environment variables at deploy
time and default to "dev" locally.
"""

import os

APP_VERSION: str = os.environ.get("APP_VERSION", "dev")
GIT_COMMIT: str = os.environ.get("GIT_COMMIT", "dev")
