"""Tests for adding products to the catalogue."""

import pytest

from localmarket.application.add_product import AddProductHandler, slugify
from localmarket.domain.exceptions import ValidationError
from localmarket.domain.model.value_objects import Money
from tests.builders import make_product
from tests.fakes import FakeProductRepository


def test_slugify():
    assert slugify("  Raw Honey (Wildflower) ") == "raw-honey-wildflower"


def test_assigns_next_numeric_id():
    repo = FakeProductRepository([make_product("7", "Heirloom Tomatoes")])
    product = AddProductHandler(repo).handle(
        "Raw Honey", "12.00", "v2", "Bee Happy", stock=5, sale_price="9.50", unit="jar"
    )
    assert product.id == "8"
    assert product.slug == "raw-honey"
    assert product.effective_price == Money.of("9.50")
    assert repo.get_by_slug("raw-honey").vendor_name == "Bee Happy"


def test_duplicate_name_rejected():
    repo = FakeProductRepository([make_product("1", "Raw Honey")])
    with pytest.raises(ValidationError, match="already exists"):
        AddProductHandler(repo).handle("raw honey", "5.00", "v1", "Farm", stock=1)


@pytest.mark.parametrize(
    "name, price, sale, stock, message",
    [
        ("", "5.00", None, 1, "name is required"),
        ("Jam", "5.00", None, -1, "cannot be negative"),
        ("Jam", "0", None, 1, "greater than zero"),
        ("Jam", "5.00", "6.00", 1, "lower than the regular price"),
    ],
)
def test_invalid_input(name, price, sale, stock, message):
    repo = FakeProductRepository()
    with pytest.raises(ValidationError, match=message):
        AddProductHandler(repo).handle(name, price, "v1", "Farm", stock=stock, sale_price=sale)
    assert repo.list_all() == []
