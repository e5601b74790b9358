"""Name-based registry of hash collaborators."""
# 说明：提供哈希后端的注册与按名称实例化能力，供工厂函数与命令行示例按配置选择哈希实现。
# 职责：
# - 维护从字符串名称到哈希类的注册表
# - 提供按名称获取类与创建实例的工厂函数

from __future__ import annotations

from typing import Any, Dict, List, Type

from rappor.core.utils.param_validation import ParamValidationError
from .base import BaseHashFunction
from .hash_impl import Md5Hash, Mmh3Hash, Xxh128Hash

_HASH_REGISTRY: Dict[str, Type[BaseHashFunction]] = {}


def register_hash(name: str, cls: Type[BaseHashFunction]) -> None:
    """Register a hash class under the given name."""
    if not name:
        raise ParamValidationError("hash name must be non-empty")
    _HASH_REGISTRY[str(name).lower()] = cls


def get_hash_class(name: str) -> Type[BaseHashFunction]:
    key = str(name).lower()
    if key not in _HASH_REGISTRY:
        raise ParamValidationError(f"hash '{name}' not registered")
    return _HASH_REGISTRY[key]


def create_hash_function(name: str, **kwargs: Any) -> BaseHashFunction:
    """Instantiate a hash collaborator by registry name."""
    # 通过名称查表并使用传入参数实例化对应哈希实现
    cls = get_hash_class(name)
    return cls(**kwargs)  # type: ignore[call-arg]


def registered_hashes() -> List[str]:
    return sorted(_HASH_REGISTRY)


register_hash("md5", Md5Hash)
register_hash("xxh128", Xxh128Hash)
register_hash("mmh3", Mmh3Hash)
