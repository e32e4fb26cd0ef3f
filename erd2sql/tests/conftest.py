"""Shared fixtures for erd2sql tests."""

import pytest
from erd2sql.config.settings import reset_settings

SHOP_DIAGRAM = """\
%% Online shop
erDiagram
    direction LR
    CUSTOMER {
        int customer_id PK
        string email UK "login address"
        string fullName
    }
    ORDER {
        int *order_id
        int customer_id FK
        timestamptz placed_at
        decimal(10,2) total
    }
    LINE-ITEM {
        int order_id PK, FK
        int product_id PK, FK
        int quantity
    }
    PRODUCT["Catalog Product"] {
        uuid product_id PK
        text[] tags
    }
    CUSTOMER ||--o{ ORDER : "places"
    ORDER ||--|{ LINE-ITEM : contains
    PRODUCT |o..o{ LINE-ITEM : "appears in"
"""


@pytest.fixture
def shop_diagram():
    """A small well-formed diagram exercising most syntax."""
    return SHOP_DIAGRAM


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Keep tests independent of any ambient diagram configuration."""
    monkeypatch.delenv("MERMAID_DIAGRAM_PATH", raising=False)
    monkeypatch.delenv("MERMAID_DIAGRAM_URL", raising=False)
    reset_settings()
    yield
    reset_settings()
