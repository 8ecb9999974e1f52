"""
Value Objects de paginação
Converte (pageNumber, pageSize) + total em janela de itens e metadados
"""
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from domain.constants import Pagination as PaginationDefaults

T = TypeVar('T')
R = TypeVar('R')


@dataclass(frozen=True)
class Pagination:
    """
    Requisição de página

    Não valida limites: pageNumber/pageSize inválidos são rejeitados
    pela etapa de validação antes de chegar aqui.
    """
    page_number: int = PaginationDefaults.DEFAULT_PAGE_NUMBER
    page_size: int = PaginationDefaults.DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


@dataclass(frozen=True)
class Paginated(Generic[T]):
    """Janela de itens com metadados de paginação"""
    items: List[T] = field(default_factory=list)
    page_number: int = PaginationDefaults.DEFAULT_PAGE_NUMBER
    page_size: int = PaginationDefaults.DEFAULT_PAGE_SIZE
    total_items: int = 0

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_items / self.page_size)

    def map(self, transform: Callable[[T], R]) -> 'Paginated[R]':
        """Projeta cada item mantendo os metadados"""
        return Paginated(
            items=[transform(item) for item in self.items],
            page_number=self.page_number,
            page_size=self.page_size,
            total_items=self.total_items
        )

    def to_dict(self, item_serializer: Optional[Callable[[T], Any]] = None) -> Dict[str, Any]:
        """Converte para o envelope da API"""
        serialize = item_serializer or (lambda item: item)
        return {
            'items': [serialize(item) for item in self.items],
            'pageNumber': self.page_number,
            'pageSize': self.page_size,
            'totalItems': self.total_items,
            'totalPages': self.total_pages
        }


def paginate(source: Sequence[T], pagination: Pagination) -> Paginated[T]:
    """
    Recorta a janela [(n-1)*size, n*size) de uma sequência já filtrada/ordenada

    Página além do fim retorna janela vazia (não é erro); os totais
    continuam informativos para o chamador.
    """
    total_items = len(source)
    start = min(max(pagination.offset, 0), total_items)
    end = min(start + pagination.limit, total_items)

    return Paginated(
        items=list(source[start:end]),
        page_number=pagination.page_number,
        page_size=pagination.page_size,
        total_items=total_items
    )
