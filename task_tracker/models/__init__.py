from .task import TITLE_MAX_LENGTH, Task

# Export all models for easy importing
__all__ = ["Task", "TITLE_MAX_LENGTH"]
