#!/usr/bin/env python
"""Script to run the task tracker API server."""
import uvicorn

from task_tracker import config
from task_tracker.logger import setup_logging

if __name__ == "__main__":
    setup_logging()
    uvicorn.run(
        "task_tracker.main:create_app",
        factory=True,
        host=config.HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )
