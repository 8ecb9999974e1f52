"""
WeatherForecast Entity - Agregado único do serviço
"""
import random
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Union

from domain.constants import Temperature as TemperatureLimits
from domain.value_objects.summary import Summary
from domain.value_objects.temperature import Temperature


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(eq=False)
class WeatherForecast:
    """
    Entidade WeatherForecast

    Identidade e data de criação são atribuídas na construção; depois disso
    só muda via change_temperature_c / change_summary, que carimbam updated_at.
    """
    date: date
    temperature_c: int
    summary: Summary
    weather_forecast_id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if isinstance(self.date, datetime) or not isinstance(self.date, date):
            raise ValueError(f"Forecast date must be a calendar date, got {self.date!r}")

        # Temperature valida o intervalo [-100, 100]
        Temperature(self.temperature_c)
        self.summary = Summary.parse(self.summary)

    @classmethod
    def create(
        cls,
        forecast_date: date,
        temperature_c: int,
        summary: Union[Summary, str, int]
    ) -> 'WeatherForecast':
        """Factory para novas previsões (id e created_at novos)"""
        return cls(
            date=forecast_date,
            temperature_c=temperature_c,
            summary=Summary.parse(summary)
        )

    @property
    def temperature_f(self) -> int:
        return Temperature(self.temperature_c).fahrenheit

    def change_temperature_c(self, temperature_c: int) -> 'WeatherForecast':
        Temperature(temperature_c)
        self.temperature_c = temperature_c
        self._touch()
        return self

    def change_summary(self, summary: Union[Summary, str, int]) -> 'WeatherForecast':
        self.summary = Summary.parse(summary)
        self._touch()
        return self

    def _touch(self) -> None:
        self.updated_at = _utcnow()

    def __eq__(self, other) -> bool:
        if not isinstance(other, WeatherForecast):
            return NotImplemented
        return self.weather_forecast_id == other.weather_forecast_id

    def __hash__(self) -> int:
        return hash(self.weather_forecast_id)

    @staticmethod
    def generate_fake_data(
        amount: int,
        start: Optional[date] = None,
        rng: Optional[random.Random] = None
    ) -> List['WeatherForecast']:
        """
        Gera previsões fake em datas passadas consecutivas (uma por dia)

        Args:
            amount: Quantidade de previsões
            start: Data de referência (padrão: hoje); a primeira previsão é o dia anterior
            rng: Gerador aleatório (permite seed em testes)
        """
        rng = rng or random.Random()
        start = start or date.today()
        summaries = list(Summary)

        return [
            WeatherForecast.create(
                start - timedelta(days=i + 1),
                rng.randint(TemperatureLimits.FAKE_MIN_CELSIUS, TemperatureLimits.FAKE_MAX_CELSIUS),
                rng.choice(summaries)
            )
            for i in range(amount)
        ]
