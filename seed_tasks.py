#!/usr/bin/env python
"""Create the tasks table if needed and load the sample tasks into it."""
import sys

from task_tracker.database import create_database, ensure_schema
from task_tracker.errors import StorageUnavailable
from task_tracker.logger import setup_logging
from task_tracker.services import TaskService


def main() -> int:
    setup_logging()
    database = create_database()
    try:
        ensure_schema(database)
        inserted = TaskService(database).seed_sample_tasks()
    except StorageUnavailable as e:
        print(f"Seeding failed: {e.message}", file=sys.stderr)
        return 1
    finally:
        database.dispose()

    if inserted:
        print(f"Inserted {inserted} sample tasks")
    else:
        print("Tasks already exist, nothing seeded")
    return 0


if __name__ == "__main__":
    sys.exit(main())
