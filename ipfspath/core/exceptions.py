"""
Custom exceptions for content path operations.

This module defines exception classes raised while parsing content paths
and resolving them against an object graph.
"""
from typing import Optional, Any, Dict, List


OFFLINE_ERROR = (
    "This command must be run in online mode. "
    "Try running 'ipfs daemon' first."
)


class IpfsPathException(Exception):
    """Base exception for all ipfspath errors."""

    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Numeric error code (if available)
        """
        self.error_code = error_code
        super().__init__(message)


class InvalidIdentifierError(IpfsPathException, ValueError):
    """Exception raised when a content identifier is malformed."""
    pass


class InvalidPathError(IpfsPathException, ValueError):
    """Exception raised when a content path does not match the path grammar."""

    def __init__(
        self,
        message: str = "invalid ipfs ref path",
        path: Any = None,
        error_code: Optional[int] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            path: The rejected input (if available)
            error_code: Numeric error code (if available)
        """
        self.path = path
        super().__init__(message, error_code)


class LinkNotFoundError(IpfsPathException, LookupError):
    """Exception raised when a named link is absent from a fetched node."""

    def __init__(
        self,
        link_name: str,
        node_id: Any,
        error_code: Optional[int] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            link_name: Name of the link that was not found
            node_id: Identifier of the node the link was sought under
            error_code: Numeric error code (if available)
        """
        self.link_name = link_name
        self.node_id = node_id
        super().__init__(f"no link named '{link_name}' under {node_id}", error_code)


class NodeNotFoundError(IpfsPathException, LookupError):
    """Exception raised by an object graph when a node cannot be found."""

    def __init__(
        self,
        identifier: Any,
        message: Optional[str] = None,
        error_code: Optional[int] = None
    ) -> None:
        self.identifier = identifier
        super().__init__(message or f"node not found: {identifier}", error_code)


class GraphTransportError(IpfsPathException):
    """Exception raised when an object graph backend cannot be reached."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        error_code: Optional[int] = None
    ) -> None:
        self.status = status
        super().__init__(message, error_code)


class OfflineError(IpfsPathException):
    """Exception raised when link-following is requested without a graph."""

    def __init__(self, message: str = OFFLINE_ERROR) -> None:
        super().__init__(message)


class BatchResolutionError(IpfsPathException):
    """
    Exception raised when one or more inputs of a batch fail to resolve.

    Each failure stays attached to the index of the input that produced it,
    and the original exception objects are kept unmodified.
    """

    def __init__(
        self,
        failures: Dict[int, BaseException],
        results: Optional[List[Any]] = None,
        inputs: Optional[List[Any]] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            failures: Mapping of input index to the error raised for it
            results: Resolved values in input order (None at failed slots)
            inputs: The submitted inputs, for diagnostics
        """
        self.failures = dict(sorted(failures.items()))
        self.results = list(results) if results is not None else []
        self.inputs = list(inputs) if inputs is not None else []

        parts = []
        for index, error in self.failures.items():
            label = repr(self.inputs[index]) if index < len(self.inputs) else f"#{index}"
            parts.append(f"[{index}] {label}: {error}")
        count = len(self.failures)
        noun = "path" if count == 1 else "paths"
        super().__init__(f"failed to resolve {count} {noun}: " + "; ".join(parts))

        if self.failures:
            self.__cause__ = next(iter(self.failures.values()))

    @property
    def first_error(self) -> Optional[BaseException]:
        """Returns the failure of the lowest failing input index."""
        return next(iter(self.failures.values()), None)
