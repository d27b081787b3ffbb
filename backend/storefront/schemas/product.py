"""Product Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - ProductCreate.name: 1-200 chars, stripped, non-empty
    - ProductCreate.price: whole currency units, 0-1_000_000
    - Response models are built from core dataclasses, never from ORM rows

Design Decisions:
    - field_validator for side-effect-free transforms (strip) — keeps models pure
"""

from pydantic import BaseModel, Field, field_validator

from storefront.core.domain_types import ProductRecord, RenderPayload


class ProductCreate(BaseModel):
    """Product creation request."""
    name: str = Field(min_length=1, max_length=200)
    price: int = Field(ge=0, le=1_000_000)
    description: str = Field("", max_length=2000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ProductResponse(BaseModel):
    id: int
    name: str
    price: int
    description: str

    @classmethod
    def from_record(cls, record: ProductRecord) -> "ProductResponse":
        return cls(**record.to_dict())


class QueryParamsResponse(BaseModel):
    q: str
    page: int


class ProductListResponse(BaseModel):
    """Resolved listing payload — records plus the params that produced them."""
    products: list[ProductResponse]
    params: QueryParamsResponse

    @classmethod
    def from_payload(cls, payload: RenderPayload) -> "ProductListResponse":
        return cls(
            products=[ProductResponse.from_record(r) for r in payload.records],
            params=QueryParamsResponse(
                q=payload.params.q, page=payload.params.page,
            ),
        )


class MutationResultResponse(BaseModel):
    success: bool
    product_id: int | None = None
    error_code: str | None = None
