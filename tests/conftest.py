"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock

# Set test environment variables
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")

from storefront.cart import CartStore, MemorySnapshotStorage  # noqa: E402
from storefront.errors import SnapshotStorageError  # noqa: E402
from storefront.models import CategoryRecord  # noqa: E402


@pytest.fixture
def memory_storage():
    """Fresh in-memory snapshot storage"""
    return MemorySnapshotStorage()


@pytest.fixture
def cart_store(memory_storage):
    """Empty cart store backed by memory storage"""
    return CartStore(memory_storage)


@pytest.fixture
def failing_storage():
    """Storage whose writes always fail"""
    storage = Mock()
    storage.read.return_value = None
    storage.write.side_effect = SnapshotStorageError("Redis down", name="cart-storage", retryable=True)
    return storage


@pytest.fixture
def mock_redis_client():
    """Mock Upstash Redis client backed by a dict"""
    data = {}
    client = Mock()
    client.get.side_effect = lambda key: data.get(key)
    client.set.side_effect = lambda key, value: data.__setitem__(key, value)
    client.delete.side_effect = lambda key: data.pop(key, None)
    client.data = data
    return client


@pytest.fixture
def sample_category_payloads():
    """Category rows as returned by the categories endpoint"""
    return [
        {"id": "electronics", "name": "Electronics", "slug": "electronics", "parentId": None,
         "isActive": True, "sortOrder": 1, "createdAt": "2025-01-01T00:00:00Z"},
        {"id": "smartphones", "name": "Smartphones", "slug": "smartphones", "parentId": "electronics",
         "isActive": True, "sortOrder": 2},
        {"id": "laptops", "name": "Laptops", "slug": "laptops", "parentId": "electronics",
         "isActive": True, "sortOrder": 1},
        {"id": "fashion", "name": "Fashion", "slug": "fashion", "parentId": "",
         "isActive": False, "sortOrder": 0},
        {"id": "gaming-laptops", "name": "Gaming Laptops", "slug": "gaming-laptops",
         "parentId": "laptops", "isActive": True, "sortOrder": 0},
    ]


@pytest.fixture
def sample_categories(sample_category_payloads):
    """Validated category records"""
    return [CategoryRecord.model_validate(p) for p in sample_category_payloads]


@pytest.fixture
def sample_product():
    """Product payload with nested attribute values"""
    return {
        "id": "product-123",
        "name": "Trail Backpack",
        "attributeValues": [
            {"attributeValue": {"value": "Red", "color": "#ff0000",
                                "attribute": {"name": "Color", "unit": None}}},
            {"attributeValue": {"value": "30", "color": None,
                                "attribute": {"name": "Capacity", "unit": "L"}}},
            {"attributeValue": {"value": "Blue", "color": "#0000ff",
                                "attribute": {"name": "Color"}}},
        ],
    }

