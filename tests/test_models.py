"""
Tests for Pydantic boundary records
"""

import pytest
from pydantic import ValidationError

from storefront.models import AttributeValueRecord, CategoryNode, CategoryRecord


class TestCategoryRecord:
    """Tests for CategoryRecord model."""

    def test_camel_case_payload(self):
        """Test API payloads validate through aliases."""
        record = CategoryRecord.model_validate({
            "id": "laptops",
            "name": "Laptops",
            "slug": "laptops",
            "parentId": "electronics",
            "isActive": False,
            "sortOrder": 3,
            "children": [{"id": "ignored"}],
        })

        assert record.parent_id == "electronics"
        assert record.is_active is False
        assert record.sort_order == 3

    def test_defaults(self):
        """Test optional fields default sensibly."""
        record = CategoryRecord(id="a", name="A", slug="a")

        assert record.parent_id is None
        assert record.is_active is True
        assert record.sort_order == 0

    def test_empty_parent_is_root(self):
        """Test empty-string parent from the form means no parent."""
        record = CategoryRecord(id="a", name="A", slug="a", parentId="")

        assert record.parent_id is None

    def test_missing_required_field(self):
        """Test missing name is rejected."""
        with pytest.raises(ValidationError):
            CategoryRecord.model_validate({"id": "a", "slug": "a"})


class TestCategoryNode:
    """Tests for CategoryNode model."""

    def test_from_record_copies(self):
        """Test node starts with no children and its own data."""
        record = CategoryRecord(id="a", name="A", slug="a")

        node = CategoryNode.from_record(record)
        node.name = "Changed"

        assert node.children == []
        assert record.name == "A"

    def test_from_node_drops_children(self):
        """Test copying a node that already has children starts it empty."""
        parent = CategoryNode(id="a", name="A", slug="a")
        parent.children.append(CategoryNode(id="b", name="B", slug="b", parent_id="a"))

        node = CategoryNode.from_record(parent)

        assert node.id == "a"
        assert node.children == []
        assert len(parent.children) == 1

    def test_to_dict_skips_repeated_nodes(self):
        """Test serialization terminates on a hand-built cycle."""
        node = CategoryNode(id="a", name="A", slug="a")
        node.children.append(node)

        data = node.to_dict()

        assert data["id"] == "a"
        assert data["children"] == []


class TestAttributeValueRecord:
    """Tests for AttributeValueRecord model."""

    def test_aliases(self):
        record = AttributeValueRecord.model_validate(
            {"attributeName": "Size", "rawValue": "10", "unit": "cm"}
        )

        assert record.attribute_name == "Size"
        assert record.raw_value == "10"
        assert record.color is None

    def test_numeric_raw_value(self):
        record = AttributeValueRecord(attribute_name="Weight", raw_value=2)

        assert record.raw_value == "2"

    def test_missing_value_rejected(self):
        with pytest.raises(ValidationError):
            AttributeValueRecord(attribute_name="Color", raw_value=None)
