"""Runtime settings, read from the environment with sensible defaults."""

import os


class Settings:
    LOG_LEVEL: str = os.environ.get("TASKS_LOG_LEVEL", "INFO")

    # Delay before the "Tasks reordered!" notice after a drop
    DROP_NOTICE_DELAY_MS: int = int(os.environ.get("TASKS_DROP_NOTICE_DELAY_MS", "200"))

    # How long a notice stays in the status bar
    NOTICE_TIMEOUT_MS: int = int(os.environ.get("TASKS_NOTICE_TIMEOUT_MS", "2000"))

    # One of: all, completed, pending
    DEFAULT_FILTER: str = os.environ.get("TASKS_DEFAULT_FILTER", "all")


settings = Settings()
