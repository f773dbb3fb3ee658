"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── ConfigurationError   (configuration.py)
    │   ├── TagContextNotFoundError
    │   ├── InvalidStrategyError
    │   ├── DuplicateRuleNameError
    │   ├── DuplicateTagContextError
    │   ├── ContextDeclaredAfterGlobalRuleError
    │   └── UnsupportedOptionForStrategyError
    ├── DomainError          (domain.py)
    │   ├── InvalidTagFormatError
    │   ├── InvalidTagQueryError
    │   └── RuleNotFoundError
    └── InfrastructureError  (infrastructure.py)
        └── StorageError
"""

from mp_tagcloud.kernel.errors.base import BaseError
from mp_tagcloud.kernel.errors.configuration import (
    ConfigurationError,
    ContextDeclaredAfterGlobalRuleError,
    DuplicateRuleNameError,
    DuplicateTagContextError,
    InvalidStrategyError,
    TagContextNotFoundError,
    UnsupportedOptionForStrategyError,
)
from mp_tagcloud.kernel.errors.domain import (
    DomainError,
    InvalidTagFormatError,
    InvalidTagQueryError,
    RuleNotFoundError,
)
from mp_tagcloud.kernel.errors.infrastructure import InfrastructureError, StorageError

__all__ = [
    "BaseError",
    "ConfigurationError",
    "ContextDeclaredAfterGlobalRuleError",
    "DomainError",
    "DuplicateRuleNameError",
    "DuplicateTagContextError",
    "InfrastructureError",
    "InvalidStrategyError",
    "InvalidTagFormatError",
    "InvalidTagQueryError",
    "RuleNotFoundError",
    "StorageError",
    "TagContextNotFoundError",
    "UnsupportedOptionForStrategyError",
]
