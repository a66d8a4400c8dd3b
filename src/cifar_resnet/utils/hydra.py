"""Hydra ConfigStore registration for cifar_resnet components."""

from __future__ import annotations

from typing import Any

from hydra.core.config_store import ConfigStore
from loguru import logger


def _infer_group(module: str) -> str:
    """Singular package name: ``cifar_resnet.models.resnet`` -> ``model``."""
    package = module.split(".")[-2]
    return package[:-1] if package.endswith("s") else package


def register(
    cls: type[Any] | None = None,
    *,
    group: str | None = None,
    name: str | None = None,
    **defaults: Any,
) -> type[Any] | Any:
    """Store a ``_target_`` node for the decorated class in Hydra's ConfigStore.

    The node lands at ``<group>/<name>`` so a root config can select it from
    its defaults list (``- model: fast_resnet``) and the command line can
    override any of ``defaults`` (``model.learning_rate=3e-4``).

    Arguments:
        cls: The class to register (bare ``@register`` usage).
        group: ConfigStore group. Defaults to the singular form of the
            defining package name.
        name: Config name. Defaults to the class name.
        **defaults: Constructor arguments written into the node.
    """

    def _store(target_cls: type[Any]) -> type[Any]:
        config_group = group or _infer_group(target_cls.__module__)
        config_name = name or target_cls.__name__
        node: dict[str, Any] = {
            "_target_": f"{target_cls.__module__}.{target_cls.__qualname__}",
            **defaults,
        }
        ConfigStore.instance().store(group=config_group, name=config_name, node=node)
        logger.debug(f"Registered {config_group}/{config_name} -> {node['_target_']}")
        return target_cls

    if cls is None:
        return _store
    return _store(cls)
