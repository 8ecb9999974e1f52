"""
Testes para Value Objects (Summary, Temperature e Pagination)
"""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../'))

import pytest

from domain.value_objects.pagination import Paginated, Pagination, paginate
from domain.value_objects.summary import Summary
from domain.value_objects.temperature import Temperature


class TestSummary:
    """Testes para a enumeração Summary"""

    def test_codes_are_stable(self):
        """REGRA: Códigos inteiros fixos de 0 (Freezing) a 9 (Scorching)"""
        assert Summary.FREEZING == 0
        assert Summary.WARM == 5
        assert Summary.SCORCHING == 9
        assert len(Summary) == 10

    def test_description(self):
        assert Summary.WARM.description == "Warm"
        assert Summary.SWELTERING.description == "Sweltering"

    def test_from_name_is_case_insensitive(self):
        assert Summary.from_name("warm") is Summary.WARM
        assert Summary.from_name("  HOT ") is Summary.HOT

    def test_from_name_unknown(self):
        """REGRA: Conjunto fechado - nomes fora dele são rejeitados"""
        with pytest.raises(ValueError, match="Unknown summary name"):
            Summary.from_name("Sunny")

    def test_from_value(self):
        assert Summary.from_value(7) is Summary.HOT

    def test_from_value_rejects_out_of_range_and_bool(self):
        with pytest.raises(ValueError):
            Summary.from_value(10)
        with pytest.raises(ValueError):
            Summary.from_value(True)

    def test_parse_accepts_names_and_codes(self):
        assert Summary.parse("Chilly") is Summary.CHILLY
        assert Summary.parse(2) is Summary.CHILLY
        assert Summary.parse("2") is Summary.CHILLY
        assert Summary.parse(Summary.CHILLY) is Summary.CHILLY

    def test_parse_rejects_non_ascii_digits(self):
        with pytest.raises(ValueError, match="Unknown summary name"):
            Summary.parse("²")


class TestTemperature:
    """Testes para Value Object Temperature"""

    @pytest.mark.parametrize("celsius,fahrenheit", [
        (25, 77),
        (0, 32),
        (-100, -148),
        (100, 212),
    ])
    def test_fahrenheit_conversion(self, celsius, fahrenheit):
        """REGRA: F = 32 + round(C / 0.5556)"""
        assert Temperature(celsius).fahrenheit == fahrenheit

    def test_limits_are_inclusive(self):
        assert Temperature(-100).celsius == -100
        assert Temperature(100).celsius == 100

    @pytest.mark.parametrize("celsius", [-101, 101, 150])
    def test_out_of_range(self, celsius):
        with pytest.raises(ValueError, match="outside the valid range"):
            Temperature(celsius)

    def test_rejects_non_integer(self):
        with pytest.raises(ValueError, match="must be an integer"):
            Temperature(25.5)

    def test_immutability(self):
        temperature = Temperature(10)
        with pytest.raises(Exception):  # FrozenInstanceError
            temperature.celsius = 20


class TestPagination:
    """Testes para paginação"""

    def test_defaults(self):
        pagination = Pagination()
        assert pagination.page_number == 1
        assert pagination.page_size == 10
        assert pagination.offset == 0

    def test_offset(self):
        assert Pagination(page_number=3, page_size=20).offset == 40

    def test_paginate_window(self):
        """REGRA: Página n contém os itens [(n-1)*size, n*size)"""
        page = paginate(list(range(25)), Pagination(page_number=2, page_size=10))

        assert page.items == list(range(10, 20))
        assert page.total_items == 25
        assert page.total_pages == 3

    def test_paginate_last_partial_page(self):
        page = paginate(list(range(25)), Pagination(page_number=3, page_size=10))
        assert page.items == [20, 21, 22, 23, 24]

    def test_page_beyond_end_is_empty(self):
        """REGRA: Página além do fim retorna vazio, totais preservados"""
        page = paginate(list(range(5)), Pagination(page_number=4, page_size=10))

        assert page.items == []
        assert page.total_items == 5
        assert page.total_pages == 1

    def test_empty_source(self):
        page = paginate([], Pagination())
        assert page.items == []
        assert page.total_pages == 0

    def test_total_pages_rounds_up(self):
        assert Paginated(items=[], page_number=1, page_size=10, total_items=1000).total_pages == 100
        assert Paginated(items=[], page_number=1, page_size=10, total_items=1001).total_pages == 101

    def test_map_keeps_metadata(self):
        page = paginate([1, 2, 3], Pagination(page_number=1, page_size=2)).map(lambda item: item * 10)

        assert page.items == [10, 20]
        assert page.total_items == 3
        assert page.page_size == 2

    def test_to_dict(self):
        page = paginate(['a', 'b'], Pagination(page_number=1, page_size=10))

        assert page.to_dict(str.upper) == {
            'items': ['A', 'B'],
            'pageNumber': 1,
            'pageSize': 10,
            'totalItems': 2,
            'totalPages': 1
        }
