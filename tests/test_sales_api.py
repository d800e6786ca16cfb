from decimal import Decimal

import cafe_pos.modules.sales.repository as sales_repository


def _place(client, customer_id, items, worker_id=None):
    body = {"customer_id": customer_id, "items": items}
    if worker_id is not None:
        body["worker_id"] = worker_id
    return client.post("/api/v1/sales", json=body)


def test_normal_customer_order(client, make_customer, make_product, stock_of):
    customer_id = make_customer(name="Ana Torres", tier="normal")
    product_a = make_product(price="3.00", stock=10)
    product_b = make_product(price="5.00", stock=10)

    response = _place(client, customer_id, [
        {"product_id": product_a, "quantity": 2},
        {"product_id": product_b, "quantity": 1},
    ])

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["customer_name"] == "Ana Torres"
    assert data["items_count"] == 2
    assert data["sale_number"].startswith("V")
    assert Decimal(data["subtotal"]) == Decimal("11.00")
    assert Decimal(data["discount"]) == Decimal("0.00")
    assert Decimal(data["service_charge"]) == Decimal("1.10")
    assert Decimal(data["total"]) == Decimal("12.10")
    assert stock_of(product_a) == 8
    assert stock_of(product_b) == 9


def test_premium_customer_order_empties_stock(client, make_customer, make_product, stock_of):
    customer_id = make_customer(tier="premium")
    product_c = make_product(price="100.00", stock=1, name="Torta de chocolate")

    response = _place(client, customer_id, [{"product_id": product_c, "quantity": 1}])

    assert response.status_code == 201
    data = response.json()
    assert Decimal(data["subtotal"]) == Decimal("100.00")
    assert Decimal(data["discount"]) == Decimal("20.00")
    assert Decimal(data["service_charge"]) == Decimal("8.00")
    assert Decimal(data["total"]) == Decimal("88.00")
    assert stock_of(product_c) == 0

    again = _place(client, customer_id, [{"product_id": product_c, "quantity": 1}])

    assert again.status_code == 409
    error = again.json()
    assert error["success"] is False
    assert error["error_code"] == "InsufficientStock"
    assert "Torta de chocolate" in error["message"]
    assert "Stock disponible: 0" in error["message"]
    assert stock_of(product_c) == 0


def test_inactive_customer_cannot_order(client, make_customer, make_product, stock_of, sales_count):
    customer_id = make_customer(is_active=False)
    product_id = make_product(stock=5)

    response = _place(client, customer_id, [{"product_id": product_id, "quantity": 1}])

    assert response.status_code == 404
    assert response.json()["error_code"] == "CustomerNotFound"
    assert stock_of(product_id) == 5
    assert sales_count() == 0


def test_missing_customer_or_items_is_invalid(client, make_customer):
    customer_id = make_customer()

    no_customer = client.post("/api/v1/sales", json={"items": [{"product_id": 1, "quantity": 1}]})
    no_items = client.post("/api/v1/sales", json={"customer_id": customer_id, "items": []})

    assert no_customer.status_code == 400
    assert no_customer.json()["error_code"] == "InvalidRequest"
    assert no_items.status_code == 400
    assert no_items.json()["error_code"] == "InvalidRequest"


def test_failure_on_third_line_leaves_all_stock_untouched(client, make_customer, make_product, stock_of, sales_count):
    customer_id = make_customer()
    products = [make_product(stock=10) for _ in range(4)]

    response = _place(client, customer_id, [
        {"product_id": products[0], "quantity": 1},
        {"product_id": products[1], "quantity": 2},
        {"product_id": 9999, "quantity": 1},
        {"product_id": products[2], "quantity": 1},
        {"product_id": products[3], "quantity": 1},
    ])

    assert response.status_code == 404
    body = response.json()
    assert body["error_code"] == "ProductNotFound"
    assert body["details"]["phase"] == "validating"
    assert [stock_of(p) for p in products] == [10, 10, 10, 10]
    assert sales_count() == 0


def test_invalid_quantity_is_reported_in_line_order(client, make_customer, make_product):
    customer_id = make_customer()
    product_id = make_product(stock=1)

    response = _place(client, customer_id, [
        {"product_id": product_id, "quantity": 5},
        {"product_id": product_id, "quantity": 0},
    ])

    # La primera línea falla antes de revisar la segunda
    assert response.json()["error_code"] == "InsufficientStock"

    response = _place(client, customer_id, [
        {"product_id": product_id, "quantity": 0},
    ])
    assert response.status_code == 400
    assert response.json()["error_code"] == "InvalidRequest"
    assert response.json()["details"]["line"] == 1


def test_malformed_body_is_invalid_request(client, make_customer):
    customer_id = make_customer()

    response = client.post("/api/v1/sales", json={
        "customer_id": customer_id,
        "items": [{"product_id": 1, "quantity": "muchos"}]
    })

    assert response.status_code == 400
    assert response.json()["error_code"] == "InvalidRequest"


def test_ids_outside_integer_range_are_invalid_request(client, make_customer, make_product, stock_of, sales_count):
    customer_id = make_customer()
    product_id = make_product(stock=5)

    oversized = [
        _place(client, customer_id, [{"product_id": 10**20, "quantity": 1}]),
        _place(client, 10**20, [{"product_id": product_id, "quantity": 1}]),
        _place(client, customer_id, [{"product_id": product_id, "quantity": 1}], worker_id=10**20),
        _place(client, customer_id, [{"product_id": -10**20, "quantity": 1}]),
    ]

    for response in oversized:
        assert response.status_code == 400
        assert response.json()["error_code"] == "InvalidRequest"
    assert stock_of(product_id) == 5
    assert sales_count() == 0


def test_oversized_quantity_is_invalid_request(client, make_customer, make_product, stock_of):
    customer_id = make_customer()
    product_id = make_product(stock=5)

    response = _place(client, customer_id, [{"product_id": product_id, "quantity": 10**20}])

    assert response.status_code == 400
    assert response.json()["error_code"] == "InvalidRequest"
    assert stock_of(product_id) == 5


def test_repeated_product_checked_against_cumulative_quantity(client, make_customer, make_product, stock_of):
    customer_id = make_customer()
    product_id = make_product(stock=3, name="Espresso")

    response = _place(client, customer_id, [
        {"product_id": product_id, "quantity": 2},
        {"product_id": product_id, "quantity": 2},
    ])

    assert response.status_code == 409
    assert "Stock disponible: 1" in response.json()["message"]
    assert stock_of(product_id) == 3


def test_unit_price_is_captured_at_sale_time(client, make_customer, make_product):
    customer_id = make_customer()
    product_id = make_product(price="4.50", stock=10)

    sale_id = _place(client, customer_id, [{"product_id": product_id, "quantity": 2}]).json()["sale_id"]
    client.put(f"/api/v1/products/{product_id}/price", json={"price": "9.99"})

    detail = client.get(f"/api/v1/sales/{sale_id}").json()["sale"]
    assert len(detail["items"]) == 1
    assert Decimal(detail["items"][0]["unit_price"]) == Decimal("4.50")
    assert Decimal(detail["items"][0]["subtotal"]) == Decimal("9.00")
    assert Decimal(detail["subtotal"]) == Decimal("9.00")


def test_default_worker_is_system_worker(client, make_customer, make_product):
    customer_id = make_customer()
    product_id = make_product()

    sale_id = _place(client, customer_id, [{"product_id": product_id, "quantity": 1}]).json()["sale_id"]
    detail = client.get(f"/api/v1/sales/{sale_id}").json()["sale"]

    assert detail["worker_id"] == 1
    assert detail["worker_name"] == "Sistema"


def test_unknown_worker_is_invalid(client, make_customer, make_product, stock_of):
    customer_id = make_customer()
    product_id = make_product(stock=2)

    response = _place(client, customer_id, [{"product_id": product_id, "quantity": 1}], worker_id=42)

    assert response.status_code == 400
    assert response.json()["error_code"] == "InvalidRequest"
    assert stock_of(product_id) == 2


def test_lines_keep_submission_order(client, make_customer, make_product):
    customer_id = make_customer()
    first = make_product(name="Zumo")
    second = make_product(name="Agua")

    sale_id = _place(client, customer_id, [
        {"product_id": first, "quantity": 1},
        {"product_id": second, "quantity": 3},
    ]).json()["sale_id"]
    items = client.get(f"/api/v1/sales/{sale_id}").json()["sale"]["items"]

    assert [item["product_id"] for item in items] == [first, second]
    assert [item["quantity"] for item in items] == [1, 3]


def test_duplicate_sale_number_rolls_back(client, make_customer, make_product, stock_of, sales_count, monkeypatch):
    customer_id = make_customer()
    product_id = make_product(stock=10)
    monkeypatch.setattr(sales_repository, "generate_sale_number", lambda: "V-FIJO")

    first = _place(client, customer_id, [{"product_id": product_id, "quantity": 1}])
    second = _place(client, customer_id, [{"product_id": product_id, "quantity": 1}])

    assert first.status_code == 201
    assert second.status_code == 500
    assert second.json()["error_code"] == "InternalError"
    assert second.json()["details"]["phase"] == "persisting"
    assert stock_of(product_id) == 9
    assert sales_count() == 1


def test_list_and_detail(client, make_customer, make_product):
    customer_id = make_customer(name="Pedro", tier="premium")
    product_id = make_product(code="CAP-01", name="Capuchino")

    _place(client, customer_id, [{"product_id": product_id, "quantity": 1}])
    _place(client, customer_id, [{"product_id": product_id, "quantity": 2}])

    listing = client.get("/api/v1/sales").json()
    assert listing["count"] == 2
    assert listing["sales"][0]["customer_name"] == "Pedro"
    assert listing["sales"][0]["customer_tier"] == "premium"

    sale_id = listing["sales"][0]["id"]
    detail = client.get(f"/api/v1/sales/{sale_id}").json()["sale"]
    assert detail["items"][0]["product_code"] == "CAP-01"
    assert detail["items"][0]["product_name"] == "Capuchino"


def test_unknown_sale_is_not_found(client):
    response = client.get("/api/v1/sales/12345")

    assert response.status_code == 404
    assert response.json()["error_code"] == "NotFound"


def test_oversized_sale_id_is_invalid_request(client):
    response = client.get(f"/api/v1/sales/{10**20}")

    assert response.status_code == 400
    assert response.json()["error_code"] == "InvalidRequest"
