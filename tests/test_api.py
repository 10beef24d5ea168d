"""
Testes de integração da API
===========================
Rotas HTTP, payloads camelCase e respostas de erro estruturadas.
"""

import io
from datetime import datetime

import pandas as pd


def create_order(client, payload):
    response = client.post("/api/orders", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["order"]


# ═══════════════════════════════════════════════════════════
# ROOT / HEALTH / LOGIN
# ═══════════════════════════════════════════════════════════

def test_ping(client):
    assert client.get("/api/ping").json() == {"message": "Hello from Sabor & Cia API!"}


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "operational"
    assert body["storage"] == "memory: healthy"


def test_admin_login(client):
    response = client.post("/api/admin/login", json={"username": "admin", "password": "123456"})
    body = response.json()

    assert response.status_code == 200
    assert body["success"] is True
    assert body["token"].startswith("admin_token_")


def test_admin_login_wrong_password(client):
    response = client.post("/api/admin/login", json={"username": "admin", "password": "senha"})
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Usuário ou senha incorretos."}


def test_admin_login_missing_fields(client):
    response = client.post("/api/admin/login", json={"username": "admin"})
    assert response.status_code == 400
    assert response.json()["success"] is False


# ═══════════════════════════════════════════════════════════
# PEDIDOS
# ═══════════════════════════════════════════════════════════

def test_create_order(client, order_payload):
    order_payload["total"] = 1.0
    order = create_order(client, order_payload)

    assert order["item"]["unitPrice"] == 15.0
    assert order["item"]["drinksTotal"] == 8.0
    assert order["item"]["totalPrice"] == 38.0
    assert order["total"] == 38.0
    assert order["status"] == "pendente"
    assert order["delivered"] is False
    assert order["customerName"] == "Bruno Lima"
    assert order["address"]["zipCode"] == "01000-000"
    assert order["item"]["options"]["houseSpecialId"] == "house_1"


def test_create_order_missing_fields(client):
    response = client.post("/api/orders", json={})
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Todos os campos são obrigatórios."}


def test_create_order_invalid_size(client, order_payload):
    order_payload["item"]["size"] = "gigante"
    response = client.post("/api/orders", json=order_payload)
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_create_order_zero_quantity(client, order_payload):
    order_payload["item"]["options"]["quantidade"] = 0
    response = client.post("/api/orders", json=order_payload)
    assert response.status_code == 400
    assert response.json()["message"] == "A quantidade deve ser pelo menos 1."


def test_create_order_malformed_body(client, order_payload):
    order_payload["item"]["options"]["quantidade"] = "duas"
    response = client.post("/api/orders", json=order_payload)
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "quantidade" in response.json()["message"]


def test_list_and_get_orders(client, order_payload):
    order = create_order(client, order_payload)

    orders = client.get("/api/orders").json()["orders"]
    assert [o["id"] for o in orders] == [order["id"]]

    response = client.get(f"/api/orders/{order['id']}")
    assert response.status_code == 200
    assert response.json()["order"] == order


def test_get_unknown_order(client):
    response = client.get("/api/orders/order_404")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Pedido não encontrado."}


def test_mark_delivered(client, order_payload):
    order = create_order(client, order_payload)

    response = client.put("/api/orders/status", json={"orderId": order["id"], "delivered": True})
    body = response.json()

    assert response.status_code == 200
    assert body["order"]["status"] == "entregue"
    assert body["order"]["delivered"] is True


def test_update_status(client, order_payload):
    order = create_order(client, order_payload)
    response = client.put("/api/orders/status", json={"orderId": order["id"], "status": "preparando"})
    assert response.json()["order"]["status"] == "preparando"


def test_update_status_invalid_value(client, order_payload):
    order = create_order(client, order_payload)
    response = client.put("/api/orders/status", json={"orderId": order["id"], "status": "voando"})
    assert response.status_code == 400


def test_update_status_missing_id(client):
    response = client.put("/api/orders/status", json={"status": "pronta"})
    assert response.status_code == 400
    assert response.json()["message"] == "ID do pedido é obrigatório."


def test_update_status_unknown_order(client):
    response = client.put("/api/orders/status", json={"orderId": "order_404", "delivered": True})
    assert response.status_code == 404


# ═══════════════════════════════════════════════════════════
# FINANÇAS
# ═══════════════════════════════════════════════════════════

def test_add_expense(client):
    response = client.post(
        "/api/finances/expense",
        json={"description": "Aluguel", "amount": 300, "installments": 3},
    )
    body = response.json()

    assert response.status_code == 201
    assert body["expense"]["monthlyAmount"] == 100.0
    assert body["message"] == (
        "Despesa de R$ 300.00 adicionada com sucesso! Dividida em 3 parcelas de R$ 100.00."
    )

    expenses = client.get("/api/finances/expenses").json()["expenses"]
    assert [e["id"] for e in expenses] == [body["expense"]["id"]]


def test_add_expense_invalid(client):
    response = client.post(
        "/api/finances/expense",
        json={"description": "Gás", "amount": 0, "installments": 1},
    )
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_add_expense_nan_amount_keeps_ledger_clean(client):
    response = client.post(
        "/api/finances/expense",
        content=b'{"description": "G\\u00e1s", "amount": NaN, "installments": 1}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400

    body = client.get("/api/finances", params={"period": "mes"}).json()
    assert body["records"] == []
    assert body["totalExpenses"] == 0


def test_finances_dashboard(client, order_payload):
    order = create_order(client, order_payload)
    client.post("/api/finances/expense", json={"description": "Luz", "amount": 50, "installments": 1})

    body = client.get("/api/finances", params={"period": "mes"}).json()

    assert body["success"] is True
    assert body["totalRevenue"] == order["total"]
    assert body["totalExpenses"] == 50.0
    assert {r["type"] for r in body["records"]} == {"entrada", "saida"}
    assert set(body["chartData"]) == {"daily", "monthly", "paymentMethods", "sizes"}
    assert body["chartData"]["sizes"] == [{"size": "Média", "count": 1, "revenue": order["total"]}]
    assert body["chartData"]["daily"][-1]["date"] == datetime.now().strftime("%d/%m")


def test_finances_unknown_period_falls_back_to_month(client, order_payload):
    create_order(client, order_payload)
    month = client.get("/api/finances", params={"period": "mes"}).json()
    other = client.get("/api/finances", params={"period": "quinzena"}).json()
    assert other["totalRevenue"] == month["totalRevenue"]


def test_export_csv(client, order_payload, tmp_path):
    create_order(client, order_payload)

    response = client.get("/api/finances/export", params={"period": "mes", "format": "csv"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert f"financas-mes-{datetime.now():%Y-%m-%d}.csv" in response.headers["content-disposition"]

    df = pd.read_csv(io.BytesIO(response.content))
    assert list(df.columns) == ["Data", "Tipo", "Descrição", "Valor"]
    assert df["Tipo"].tolist() == ["Entrada"]
    assert df["Valor"].tolist() == [38.0]
    assert list((tmp_path / "data").glob("financas-mes-*.csv"))


def test_export_xlsx(client, order_payload):
    create_order(client, order_payload)
    client.post("/api/finances/expense", json={"description": "Gás", "amount": 120, "installments": 1})

    response = client.get("/api/finances/export", params={"period": "semana", "format": "xlsx"})

    assert response.status_code == 200
    df = pd.read_excel(io.BytesIO(response.content), engine="openpyxl")
    assert sorted(df["Tipo"].tolist()) == ["Entrada", "Saída"]


def test_export_unknown_format(client):
    response = client.get("/api/finances/export", params={"format": "pdf"})
    assert response.status_code == 400


# ═══════════════════════════════════════════════════════════
# CARDÁPIO
# ═══════════════════════════════════════════════════════════

def test_list_catalog(client):
    assert len(client.get("/api/admin/ingredients").json()["ingredients"]) == 5
    assert len(client.get("/api/admin/house-specials").json()["houseSpecials"]) == 2
    drinks = client.get("/api/admin/drinks").json()["drinks"]
    assert {d["type"] for d in drinks} == {"coca-lata", "guarana-lata", "sprite-lata"}


def test_create_ingredient_and_duplicate(client):
    response = client.post("/api/admin/ingredients", json={"name": "Farofa"})
    assert response.status_code == 201
    assert response.json()["ingredient"]["available"] is True

    response = client.post("/api/admin/ingredients", json={"name": "farofa"})
    assert response.status_code == 400


def test_toggle_ingredient_without_body_flips(client):
    first = client.patch("/api/admin/ingredients/ing_2/toggle").json()
    second = client.patch("/api/admin/ingredients/ing_2/toggle").json()

    assert first["ingredient"]["available"] is False
    assert second["ingredient"]["available"] is True


def test_toggle_with_explicit_value(client):
    response = client.patch("/api/admin/drinks/drink_1/toggle", json={"available": False})
    assert response.json()["drink"]["available"] is False

    response = client.patch("/api/admin/drinks/drink_1/toggle", json={"available": False})
    assert response.json()["drink"]["available"] is False


def test_toggle_unknown_entries(client):
    assert client.patch("/api/admin/ingredients/x/toggle").status_code == 404
    assert client.patch("/api/admin/house-specials/x/toggle").status_code == 404
    assert client.patch("/api/admin/drinks/x/toggle").status_code == 404


def test_create_house_special(client):
    response = client.post(
        "/api/admin/house-specials",
        json={"name": "Fit", "description": "Frango e salada", "ingredients": ["ing_4", "ing_5"]},
    )
    assert response.status_code == 201
    assert response.json()["houseSpecial"]["ingredients"] == ["ing_4", "ing_5"]


def test_create_house_special_bad_reference(client):
    response = client.post(
        "/api/admin/house-specials",
        json={"name": "Fit", "description": "Frango", "ingredients": ["ing_999"]},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Alguns ingredientes selecionados não existem."


def test_create_drink(client):
    response = client.post(
        "/api/admin/drinks",
        json={"type": "sprite-lata", "name": "Sprite Zero", "price": 4.5},
    )
    assert response.status_code == 201
    assert response.json()["drink"]["price"] == 4.5

    response = client.post("/api/admin/drinks", json={"type": "suco", "name": "Suco", "price": 5})
    assert response.status_code == 400
