"""
Weather Forecast Created - handler do evento pós-commit
Roda desacoplado da resposta HTTP; falhas de dependência não chegam ao cliente
"""
from typing import Optional

from ddtrace import tracer

from application.ports.output.brewery_provider_port import IBreweryProvider
from domain.events import WeatherForecastCreatedEvent
from domain.exceptions import DependencyException
from shared.config.logger_config import get_logger
from shared.pipeline.cancellation import CancellationToken

logger = get_logger(child=True)


class WeatherForecastCreatedEventHandler:
    """Sugere uma cervejaria para o clima recém-cadastrado"""

    def __init__(self, brewery_provider: IBreweryProvider):
        self.brewery_provider = brewery_provider

    @tracer.wrap(resource="event.weather_forecast_created")
    async def __call__(
        self,
        event: WeatherForecastCreatedEvent,
        cancellation: Optional[CancellationToken] = None
    ) -> None:
        logger.info(
            f"Weather forecast created with id {event.weather_forecast_id}",
            weather_forecast_id=str(event.weather_forecast_id),
            event_id=str(event.event_id)
        )

        try:
            brewery = await self.brewery_provider.get_random_brewery(cancellation)
        except DependencyException as e:
            logger.warning(
                "Brewery lookup failed",
                weather_forecast_id=str(event.weather_forecast_id),
                error=e.message,
                details=e.details
            )
            return

        logger.info(
            f"And {brewery.name} has a good beer for this weather!",
            brewery_id=brewery.id,
            brewery_name=brewery.name
        )
