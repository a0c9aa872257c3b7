"""
Custom exceptions for the workflow service.
"""


class WorkflowError(Exception):
    """Base exception for the workflow service."""
    pass


class StorageError(WorkflowError):
    """Raised when the dataset directory cannot be read or written."""
    pass


class CatalogError(WorkflowError):
    """Raised when a decision-tree answer cannot be mapped to a catalog."""
    pass
