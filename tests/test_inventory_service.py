import pytest

from cafe_pos.config.database import transaction_scope
from cafe_pos.core.exceptions import CustomerNotFound, InsufficientStock, ProductNotFound
from cafe_pos.shared.services.inventory_service import InventoryService


def test_decrement_stock_reduces_quantity(db, make_product, stock_of):
    product_id = make_product(stock=5)

    with transaction_scope(db):
        InventoryService.decrement_stock(db, product_id, 5)

    assert stock_of(product_id) == 0


def test_decrement_never_drives_stock_negative(db, make_product, stock_of):
    product_id = make_product(stock=2, name="Café Latte")

    with pytest.raises(InsufficientStock) as exc_info:
        with transaction_scope(db):
            InventoryService.decrement_stock(db, product_id, 3)

    assert "Café Latte" in exc_info.value.message
    assert "Stock disponible: 2" in exc_info.value.message
    assert exc_info.value.details["available"] == 2
    assert stock_of(product_id) == 2


def test_decrement_inactive_product_is_not_found(db, make_product, stock_of):
    product_id = make_product(stock=4, is_active=False)

    with pytest.raises(ProductNotFound):
        with transaction_scope(db):
            InventoryService.decrement_stock(db, product_id, 1)

    assert stock_of(product_id) == 4


def test_find_active_product_rejects_missing_and_inactive(db, make_product):
    inactive_id = make_product(is_active=False)

    with pytest.raises(ProductNotFound):
        InventoryService.find_active_product(db, 9999)
    with pytest.raises(ProductNotFound):
        InventoryService.find_active_product(db, inactive_id)


def test_find_active_customer_rejects_inactive(db, make_customer):
    active_id = make_customer(name="Luis")
    inactive_id = make_customer(name="Marta", is_active=False)

    assert InventoryService.find_active_customer(db, active_id).name == "Luis"
    with pytest.raises(CustomerNotFound):
        InventoryService.find_active_customer(db, inactive_id)


def test_increment_stock(db, make_product, stock_of):
    product_id = make_product(stock=1)

    with transaction_scope(db):
        assert InventoryService.increment_stock(db, product_id, 4) == 5

    assert stock_of(product_id) == 5
