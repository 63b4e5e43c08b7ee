"""Domain package exports for value objects and ports."""

from .entities import RESOURCES, Column, ResourceSpec, resource_spec
from .pagination import LIMIT_CHOICES, ListQuery, PageResult
from .ports import AdminPort, Record, TokenStorePort, UseCaseError
from .pricing import compute_final_price
from .session import Identity, MalformedTokenError, decode_identity
from .validation import FieldRule, validate

__all__ = [
    "AdminPort",
    "Column",
    "FieldRule",
    "Identity",
    "LIMIT_CHOICES",
    "ListQuery",
    "MalformedTokenError",
    "PageResult",
    "RESOURCES",
    "Record",
    "ResourceSpec",
    "TokenStorePort",
    "UseCaseError",
    "compute_final_price",
    "decode_identity",
    "resource_spec",
    "validate",
]
