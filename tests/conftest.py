"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import pytest


@pytest.fixture
def simple_doc() -> dict:
    """Root with two leaf children."""
    return {"name": "Root", "children": [{"name": "A"}, {"name": "B"}]}


@pytest.fixture
def service_doc() -> dict:
    """Three levels with properties, nested mappings and scalar arrays."""
    return {
        "name": "Platform",
        "owner": "infra",
        "children": [
            {
                "name": "Auth-Service",
                "protocol": "JWT",
                "port": 8443,
                "nodes": [
                    {"name": "TokenStore", "engine": "redis"},
                    {"name": "KeyRotation", "interval": "24h"},
                ],
            },
            {
                "name": "Billing",
                "currency": "EUR",
                "tags": ["payments", "invoices"],
                "database": {"engine": "postgres", "replicas": 2},
            },
        ],
    }


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Avoid loading project .env in tests unless explicitly set."""
    for key in (
        "OUTPUT_DIR",
        "REBUILD_DEBOUNCE_MS",
        "MAX_NODES_PER_LEVEL",
        "MAX_TREE_DEPTH",
        "VIEWPORT_WIDTH",
        "VIEWPORT_HEIGHT",
    ):
        monkeypatch.delenv(key, raising=False)
