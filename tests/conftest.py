"""
Fixtures compartilhadas
=======================
Store em memória por teste e TestClient com o store injetado.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from sabor.main import app
from sabor.schemas import Address, CreateOrderRequest, DrinkOption, MarmitaOptions, OrderItemRequest
from sabor.services.storage import get_store
from sabor.services.storage.memory import MemoryStore


# ═══════════════════════════════════════════════════════════
# STORE
# ═══════════════════════════════════════════════════════════

@pytest.fixture
def store():
    """MemoryStore novo, com o catálogo padrão"""
    return MemoryStore()


@pytest.fixture
def empty_store():
    """MemoryStore sem catálogo"""
    return MemoryStore(seed=False)


@pytest.fixture
def now():
    return datetime(2024, 5, 15, 12, 0, 0)


# ═══════════════════════════════════════════════════════════
# PEDIDOS
# ═══════════════════════════════════════════════════════════

def make_order_request(
    size="media",
    quantidade=1,
    drinks=None,
    salada=False,
    torresmo=False,
    talheres=False,
    customer_name="Ana Souza",
    payment_method="pix",
) -> CreateOrderRequest:
    drinks = drinks or []
    return CreateOrderRequest(
        item=OrderItemRequest(
            size=size,
            options=MarmitaOptions(
                ordering_type="personalizada",
                selected_ingredients=["ing_1", "ing_2", "ing_4"],
                salada=salada,
                torresmo=torresmo,
                talheres=talheres,
                quantidade=quantidade,
                wants_drinks=bool(drinks),
                drinks=[DrinkOption(type=ref, quantity=qty) for ref, qty in drinks],
            ),
        ),
        address=Address(
            street="Rua das Flores",
            number="123",
            neighborhood="Centro",
            city="São Paulo",
            zip_code="01000-000",
        ),
        customer_name=customer_name,
        customer_phone="(11) 99999-0000",
        payment_method=payment_method,
    )


@pytest.fixture
def order_request():
    """Fábrica de CreateOrderRequest válidos"""
    return make_order_request


@pytest.fixture
def order_payload():
    """Corpo JSON (camelCase) de um pedido válido"""
    return {
        "item": {
            "size": "media",
            "options": {
                "orderingType": "moda-da-casa",
                "houseSpecialId": "house_1",
                "salada": True,
                "torresmo": False,
                "talheres": True,
                "quantidade": 2,
                "wantsDrinks": True,
                "drinks": [{"type": "coca-lata", "quantity": 2}],
            },
        },
        "address": {
            "street": "Rua das Flores",
            "number": "123",
            "neighborhood": "Centro",
            "city": "São Paulo",
            "zipCode": "01000-000",
        },
        "customerName": "Bruno Lima",
        "customerPhone": "(11) 98888-7777",
        "paymentMethod": "cartao",
    }


# ═══════════════════════════════════════════════════════════
# API
# ═══════════════════════════════════════════════════════════

@pytest.fixture
def client(store, tmp_path, monkeypatch):
    """TestClient usando o store do teste; exportações vão para tmp_path"""
    monkeypatch.chdir(tmp_path)
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
