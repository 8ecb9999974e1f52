"""
Exception Handler Service
Centraliza tratamento de exceções com logging estruturado
"""
import json
from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response

from domain.constants import HttpStatus
from domain.exceptions import (
    DomainException,
    InfrastructureException,
    WeatherForecastNotFoundException,
)
from shared.config.logger_config import logger as app_logger
from shared.pipeline.exceptions import (
    OperationCancelledException,
    PipelineConfigurationException,
    ValidationException,
)


def _json_response(status_code: int, body: Dict[str, Any]) -> Response:
    return Response(
        status_code=status_code,
        content_type="application/json",
        body=json.dumps(body, default=str)
    )


class ExceptionHandlerService:
    """
    Service para centralizar tratamento de exceções da aplicação
    Responsável por converter exceções em respostas HTTP apropriadas
    """
    logger = app_logger

    def __init__(self, logger=app_logger):
        # Permite injeção de logger compartilhado para manter contexto de correlação
        if logger:
            ExceptionHandlerService.logger = logger

    @staticmethod
    def handle_validation_error(ex: ValidationException) -> Response:
        """Handle 400/404/409 - status mais severo entre os erros de validação"""
        status_code = ex.status_code
        errors = [error.to_dict() for error in ex.result.errors]
        ExceptionHandlerService.logger.warning(
            "Validation failed",
            error=str(ex),
            status_code=status_code,
            errors=errors
        )
        return _json_response(status_code, {
            "type": "ValidationException",
            "error": "Validation failed",
            "message": ex.message,
            "statusCode": status_code,
            "errors": errors,
            "details": ex.details
        })

    @staticmethod
    def handle_weather_forecast_not_found(ex: WeatherForecastNotFoundException) -> Response:
        """Handle 404 - Weather forecast not found"""
        ExceptionHandlerService.logger.warning("Weather forecast not found", error=str(ex), details=ex.details)
        return _json_response(HttpStatus.NOT_FOUND, {
            "type": "WeatherForecastNotFoundException",
            "error": "Weather forecast not found",
            "message": str(ex),
            "details": ex.details
        })

    @staticmethod
    def handle_operation_cancelled(ex: OperationCancelledException) -> Response:
        """Handle 499 - Request cancelled or deadline exceeded"""
        ExceptionHandlerService.logger.warning("Operation cancelled", error=str(ex), details=ex.details)
        return _json_response(HttpStatus.CLIENT_CLOSED_REQUEST, {
            "type": "OperationCancelledException",
            "error": "Operation cancelled",
            "message": str(ex),
            "details": ex.details
        })

    @staticmethod
    def handle_infrastructure_error(ex: InfrastructureException) -> Response:
        """Handle 503 - Data store unavailable after retries"""
        ExceptionHandlerService.logger.error(
            "Infrastructure failure after retries",
            error=str(ex),
            details=ex.details,
            exc_info=True
        )
        return _json_response(HttpStatus.SERVICE_UNAVAILABLE, {
            "type": "InfrastructureException",
            "error": "Service unavailable",
            "message": "The data store is temporarily unavailable, try again later",
            "details": ex.details
        })

    @staticmethod
    def handle_domain_error(ex: DomainException) -> Response:
        """Handle 400 - Domain rule violations without a specific handler"""
        ExceptionHandlerService.logger.warning("Domain error", error=str(ex), details=ex.details)
        return _json_response(HttpStatus.BAD_REQUEST, {
            "type": type(ex).__name__,
            "error": "Domain error",
            "message": str(ex),
            "details": ex.details
        })

    @staticmethod
    def handle_pipeline_configuration_error(ex: PipelineConfigurationException) -> Response:
        """Handle 500 - Handler registry or pipeline wired incorrectly"""
        ExceptionHandlerService.logger.error(
            "Pipeline misconfigured",
            error=str(ex),
            details=ex.details,
            exc_info=True
        )
        return _json_response(HttpStatus.INTERNAL_SERVER_ERROR, {
            "error": "Internal server error",
            "message": "An unexpected error occurred"
        })

    @staticmethod
    def handle_value_error(ex: ValueError) -> Response:
        """Handle 400 - Validation errors (ValueError)"""
        ExceptionHandlerService.logger.warning("Validation error", error=str(ex))
        return _json_response(HttpStatus.BAD_REQUEST, {
            "type": "ValidationError",
            "error": "Validation error",
            "message": str(ex)
        })

    @staticmethod
    def handle_unexpected_error(ex: Exception) -> Response:
        """Handle 500 - Unexpected errors"""
        ExceptionHandlerService.logger.error("Unexpected error", error=str(ex), exc_info=True)
        return _json_response(HttpStatus.INTERNAL_SERVER_ERROR, {
            "error": "Internal server error",
            "message": "An unexpected error occurred"
        })
