"""
Value Object para o resumo (classificação) da previsão
Enumeração fechada com códigos inteiros estáveis
"""
from enum import IntEnum
from typing import Any


class Summary(IntEnum):
    """
    Classificação da previsão

    Cada nível tem um código inteiro estável (0-9) usado na persistência
    e exposto na API como `summaryId`.
    """
    FREEZING = 0
    BRACING = 1
    CHILLY = 2
    COOL = 3
    MILD = 4
    WARM = 5
    BALMY = 6
    HOT = 7
    SWELTERING = 8
    SCORCHING = 9

    @property
    def description(self) -> str:
        """Nome de exibição (ex: "Freezing")"""
        return self.name.capitalize()

    @classmethod
    def names(cls) -> list:
        return [member.description for member in cls]

    @classmethod
    def from_name(cls, name: str) -> 'Summary':
        """
        Busca pelo nome (case-insensitive)

        Raises:
            ValueError: Se o nome não existe
        """
        if not isinstance(name, str):
            raise ValueError(f"Summary name must be a string, got {name!r}")
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown summary name: {name!r}") from None

    @classmethod
    def from_value(cls, value: int) -> 'Summary':
        """
        Busca pelo código inteiro

        Raises:
            ValueError: Se o código não existe
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Summary value must be an integer, got {value!r}")
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown summary value: {value!r}") from None

    @classmethod
    def parse(cls, raw: Any) -> 'Summary':
        """Aceita Summary, nome, código inteiro ou código numérico em string"""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, int):
            return cls.from_value(raw)
        digits = raw.strip().removeprefix('-') if isinstance(raw, str) else ''
        if digits.isascii() and digits.isdigit():
            return cls.from_value(int(raw.strip()))
        return cls.from_name(raw)
