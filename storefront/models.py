"""
Pydantic Models - Boundary records for catalog data

Records arrive from the data-fetch layer in camelCase. They are validated
here once, so the tree builder and facet resolver only ever see
well-formed objects.
"""

from typing import Optional, List

from pydantic import BaseModel, Field, field_validator


def _coerce_identifier(v):
    # Numeric ids show up from CSV imports
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return str(v)
    return v


class CategoryRecord(BaseModel):
    """Flat category as returned by the categories endpoint."""
    id: str
    name: str
    slug: str
    parent_id: Optional[str] = Field(None, alias="parentId")
    is_active: bool = Field(True, alias="isActive")
    sort_order: int = Field(0, alias="sortOrder")
    description: Optional[str] = None
    image: Optional[str] = None

    class Config:
        extra = "ignore"  # children/products/timestamps from the API
        populate_by_name = True

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v):
        return _coerce_identifier(v)

    @field_validator("parent_id", mode="before")
    @classmethod
    def normalize_parent_id(cls, v):
        # Category form sends "" for "no parent"
        if v == "":
            return None
        return _coerce_identifier(v)


class CategoryNode(CategoryRecord):
    """Category with its owned, ordered children."""
    children: List["CategoryNode"] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: CategoryRecord) -> "CategoryNode":
        """Copy a record (or an existing node) into a fresh node with no children."""
        return cls(**record.model_dump(exclude={"children"}), children=[])

    def _own_fields(self) -> dict:
        return self.model_dump(by_alias=True, exclude={"children"})

    def to_dict(self) -> dict:
        """Serialize the subtree with camelCase keys, without recursion."""
        root = self._own_fields()
        stack = [(self, root)]
        seen = {id(self)}
        while stack:
            node, out = stack.pop()
            out["children"] = []
            for child in node.children:
                if id(child) in seen:
                    continue
                seen.add(id(child))
                child_out = child._own_fields()
                out["children"].append(child_out)
                stack.append((child, child_out))
        return root


CategoryNode.model_rebuild()


class AttributeValueRecord(BaseModel):
    """One attribute value attached to a product or variant."""
    attribute_name: str = Field(..., alias="attributeName")
    raw_value: str = Field(..., alias="rawValue")
    unit: Optional[str] = None
    color: Optional[str] = None

    class Config:
        extra = "ignore"
        populate_by_name = True

    @field_validator("raw_value", mode="before")
    @classmethod
    def normalize_raw_value(cls, v):
        # NUMBER attributes come back as JSON numbers
        return _coerce_identifier(v)
