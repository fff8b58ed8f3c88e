from .tasks import SAMPLE_TASKS, TaskService

__all__ = ["TaskService", "SAMPLE_TASKS"]
