"""
Pipeline Exceptions
Erros do mecanismo validate -> handle -> transform -> publish
"""
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.pipeline.validation import ValidationResult


class PipelineException(Exception):
    """Base exception for pipeline errors"""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationException(PipelineException):
    """Raised when a request fails validation; carries the full ValidationResult"""
    def __init__(self, result: 'ValidationResult', message: str = None):
        first = result.first_error
        super().__init__(
            message or (first.message if first else "Validation failed"),
            details={"errors": [error.to_dict() for error in result.errors]}
        )
        self.result = result

    @property
    def status_code(self) -> int:
        return self.result.status_code


class OperationCancelledException(PipelineException):
    """Raised when the request's cancellation token fires"""
    pass


class PipelineConfigurationException(PipelineException):
    """Raised when a pipeline or registry is wired incorrectly"""
    pass


class HandlerNotFoundException(PipelineConfigurationException):
    """Raised when no handler is registered for a request type"""
    pass


class AmbiguousHandlerException(PipelineConfigurationException):
    """Raised when more than one handler matches a request"""
    pass


class DuplicateHandlerException(PipelineConfigurationException):
    """Raised when a request type is registered twice"""
    pass
