"""
Domain Constants - Todas as constantes de domínio centralizadas
Limites de negócio, códigos e mensagens de validação
"""


class Temperature:
    """Limites de temperatura aceitos (°C)"""

    MIN_CELSIUS = -100
    MAX_CELSIUS = 100

    # Fahrenheit = 32 + round(C / FAHRENHEIT_DIVISOR)
    FAHRENHEIT_DIVISOR = 0.5556

    # Faixa usada para gerar dados fake
    FAKE_MIN_CELSIUS = -20
    FAKE_MAX_CELSIUS = 55


class Pagination:
    """Defaults de paginação"""

    DEFAULT_PAGE_NUMBER = 1
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 100


class ValidationCodes:
    """Códigos de erro de validação (machine codes)"""

    INVALID_VALUE = "INVALID_VALUE"
    REQUIRED = "REQUIRED"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    INVALID_DATE = "INVALID_DATE"
    INVALID_ENUM = "INVALID_ENUM"
    INVALID_FORMAT = "INVALID_FORMAT"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


class Messages:
    """Templates de mensagens (str.format com value/field)"""

    REQUIRED = "{field} is required"
    NOT_EMPTY = "{field} cannot be empty"
    GREATER_THAN = "{field} must be greater than {minimum}, got {value}"
    GREATER_OR_EQUALS = "{field} must be greater than or equal to {minimum}, got {value}"
    LESS_THAN = "{field} must be less than {maximum}, got {value}"
    LESS_OR_EQUALS = "{field} must be less than or equal to {maximum}, got {value}"
    BETWEEN = "{field} must be between {minimum} and {maximum}, got {value}"
    PAST = "{field} must be a past date, got {value}"
    INVALID_DATE = "{field} must be a valid calendar date, got {value}"
    INVALID_ENUM = "{field} must be one of {options}, got {value}"
    INVALID_VALUE = "{field} is invalid: {value}"
    INVALID_FORMAT = "{field} has an invalid format: {value}"

    NOT_FOUND = "Weather forecast with identifier `{value}` was not found"
    CONFLICT = "A weather forecast for date `{value}` already exists"
    DATE_RANGE = "minDate `{value}` must be on or before maxDate"


class HttpStatus:
    """Status HTTP usados pela validação e pelos handlers de exceção"""

    OK = 200
    CREATED = 201
    NO_CONTENT = 204
    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409
    CLIENT_CLOSED_REQUEST = 499
    INTERNAL_SERVER_ERROR = 500
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
