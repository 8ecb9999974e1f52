"""
Domain Exceptions - Business Rule Violations
Clean Architecture: Domain layer exceptions
"""


class DomainException(Exception):
    """Base exception for all domain-level errors"""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class WeatherForecastNotFoundException(DomainException):
    """Raised when a weather forecast is not found in the repository"""
    pass


class InfrastructureException(DomainException):
    """Raised when the data store fails transiently (eligible for retry)"""
    pass


class DependencyException(DomainException):
    """Raised when an external collaborator is unavailable"""
    pass


class BreweryProviderException(DependencyException):
    """Raised when the Open Brewery DB provider fails"""
    def __init__(self, message: str, details: dict = None):
        super().__init__(
            f"Problem accessing OpenBreweryDB API with message: {message}",
            details
        )
