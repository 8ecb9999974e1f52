"""
Value Object para temperatura
Encapsula conversões e validações de temperatura
"""
from dataclasses import dataclass

from domain.constants import Temperature as TemperatureLimits


@dataclass(frozen=True)
class Temperature:
    """
    Value Object para temperatura

    Características:
    - Imutável (frozen=True)
    - Graus Celsius inteiros dentro de [-100, 100]
    - Conversão para Fahrenheit
    """
    celsius: int

    def __post_init__(self):
        """Valida temperatura no momento da criação"""
        if isinstance(self.celsius, bool) or not isinstance(self.celsius, int):
            raise ValueError(f"Temperature must be an integer, got {self.celsius!r}")

        if not (TemperatureLimits.MIN_CELSIUS <= self.celsius <= TemperatureLimits.MAX_CELSIUS):
            raise ValueError(
                f"Temperature {self.celsius}°C outside the valid range "
                f"[{TemperatureLimits.MIN_CELSIUS}, {TemperatureLimits.MAX_CELSIUS}]"
            )

    @property
    def fahrenheit(self) -> int:
        """
        Converte para Fahrenheit

        Returns:
            Temperatura em °F (ex: 25°C -> 77°F)
        """
        return 32 + round(self.celsius / TemperatureLimits.FAHRENHEIT_DIVISOR)
