"""
Domain Events - Fatos imutáveis publicados após escritas bem-sucedidas
Não são persistidos
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


@dataclass(frozen=True)
class DomainEvent:
    """Base para eventos de domínio"""
    event_id: uuid.UUID = field(default_factory=uuid.uuid4, kw_only=True)
    occurred_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
        kw_only=True
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'eventId': str(self.event_id),
            'occurredAt': self.occurred_at.isoformat()
        }


@dataclass(frozen=True)
class WeatherForecastCreatedEvent(DomainEvent):
    """Publicado quando uma previsão é criada"""
    weather_forecast_id: uuid.UUID

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['weatherForecastId'] = str(self.weather_forecast_id)
        return data
