"""
Custom exception classes for module graph construction.

This module defines all custom exceptions used throughout the module_graph
package. These exceptions provide specific error types for the different
failure scenarios: malformed metadata documents, inconsistent graphs and
failed repository requests.
"""

from typing import Optional, Sequence


class ModuleGraphError(Exception):
    """Base exception class for all module graph errors.

    This exception serves as the base class for all custom exceptions in the
    module_graph package. It can be used to catch any error raised while
    loading metadata, building the graph or writing reports.

    Attributes:
        message: Human-readable error message describing the error.
    """

    def __init__(self, message: str) -> None:
        """Initialize a ModuleGraphError with a message.

        Args:
            message: Error message describing what went wrong.
        """
        self.message = message
        super().__init__(self.message)


class MetadataFormatError(ModuleGraphError):
    """Exception raised when a metadata document cannot be deserialized.

    Raised when a required field is missing or a field has the wrong shape
    (e.g. ``variants`` is not a list).

    Attributes:
        message: Error message describing the problem.
        source: Optional file name or URL the document was read from.
    """

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class GraphIntegrityError(ModuleGraphError):
    """Exception raised when a dependency id does not resolve to exactly one node.

    A dangling or duplicated reference means the input data is inconsistent,
    so any partial graph would be misleading. The whole run fails.

    Attributes:
        message: Error message describing the violation.
        node_id: Id of the node whose dependency list holds the reference.
        reference: The dependency id that failed to resolve.
    """

    def __init__(
        self, message: str, node_id: Optional[str], reference: str
    ) -> None:
        self.node_id = node_id
        self.reference = reference
        super().__init__(message)


class MissingDependencyError(GraphIntegrityError):
    """Exception raised when a dependency id matches no node in the graph."""

    def __init__(self, node_id: Optional[str], reference: str) -> None:
        if node_id:
            message = (
                f"Module '{node_id}' depends on '{reference}', "
                f"which is not part of the graph"
            )
        else:
            message = f"Module '{reference}' is not part of the graph"
        super().__init__(message, node_id, reference)


class DuplicateNodeError(GraphIntegrityError):
    """Exception raised when a dependency id matches more than one node.

    Attributes:
        matches: Paths of all nodes sharing the id.
    """

    def __init__(
        self,
        node_id: Optional[str],
        reference: str,
        matches: Sequence[str],
    ) -> None:
        self.matches = list(matches)
        message = (
            f"Id '{reference}' is shared by {len(self.matches)} modules: "
            f"{', '.join(self.matches)}"
        )
        if node_id:
            message = f"Cannot resolve dependency of '{node_id}'. {message}"
        super().__init__(message, node_id, reference)


class FetchError(ModuleGraphError):
    """Exception raised when a repository request fails.

    Attributes:
        message: Error message describing the failure.
        url: Requested URL.
        status_code: HTTP status code, if a response was received.
    """

    def __init__(
        self, message: str, url: str, status_code: Optional[int] = None
    ) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(f"{message} ({url})")
