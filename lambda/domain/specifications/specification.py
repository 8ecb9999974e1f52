"""
Specification Pattern - Predicados componíveis sobre entidades

Uma Specification é só descrição: nada é avaliado na construção.
A avaliação acontece quando o repositório aplica a spec à fonte de dados.
"""
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Iterator, List, TypeVar, Union

T = TypeVar('T')

Predicate = Callable[[T], bool]
SpecOrPredicate = Union['Specification[T]', Predicate]


def _always(_candidate: Any) -> bool:
    return True


class Specification(Generic[T]):
    """
    Predicado imutável combinável com AND/OR/NOT

    Subclasses preservam o tipo na composição, permitindo helpers fluentes:

        spec = WeatherForecastSpecification.create().with_id(forecast_id)
    """

    def __init__(self, predicate: Predicate = _always):
        self._predicate = predicate

    @classmethod
    def create(cls):
        """Spec vazia (satisfeita por qualquer candidato)"""
        return cls()

    def is_satisfied_by(self, candidate: T) -> bool:
        return bool(self._predicate(candidate))

    def __call__(self, candidate: T) -> bool:
        return self.is_satisfied_by(candidate)

    def apply(self, source: Iterable[T]) -> Iterator[T]:
        """Filtro lazy sobre a fonte de dados"""
        return (candidate for candidate in source if self.is_satisfied_by(candidate))

    def and_(self, other: SpecOrPredicate):
        left, right = self._predicate, _as_predicate(other)
        return self._derive(lambda candidate: left(candidate) and right(candidate))

    def or_(self, other: SpecOrPredicate):
        left, right = self._predicate, _as_predicate(other)
        return self._derive(lambda candidate: left(candidate) or right(candidate))

    def not_(self):
        inner = self._predicate
        return self._derive(lambda candidate: not inner(candidate))

    def and_if(self, condition: bool, other: SpecOrPredicate):
        """Adiciona o predicado só quando condition é verdadeira"""
        return self.and_(other) if condition else self

    def or_if(self, condition: bool, other: SpecOrPredicate):
        return self.or_(other) if condition else self

    def __and__(self, other: SpecOrPredicate):
        return self.and_(other)

    def __or__(self, other: SpecOrPredicate):
        return self.or_(other)

    def __invert__(self):
        return self.not_()

    def _derive(self, predicate: Predicate):
        return type(self)(predicate)


def _as_predicate(other: SpecOrPredicate) -> Predicate:
    if isinstance(other, Specification):
        return other.is_satisfied_by
    if callable(other):
        return other
    raise TypeError(f"Expected a Specification or callable, got {type(other).__name__}")


@dataclass(frozen=True)
class Ordering(Generic[T]):
    """Ordenação aplicada antes da paginação"""
    key: Callable[[T], Any]
    descending: bool = False

    def apply(self, items: Iterable[T]) -> List[T]:
        return sorted(items, key=self.key, reverse=self.descending)
