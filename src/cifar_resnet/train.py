"""Training entrypoint for cifar_resnet.

Usage:
    cifar-resnet-train                              # defaults
    cifar-resnet-train data.data_dir=/path/to/cifar # dataset location
    cifar-resnet-train data.batch_size=128          # override batch size
    cifar-resnet-train trainer.max_steps=1000       # override iterations
    cifar-resnet-train logging=csv                  # also write metrics.csv
"""

import sys
from typing import Any

import hydra
import lightning as L
from loguru import logger
from omegaconf import DictConfig, OmegaConf

# CRITICAL: import models to trigger @register decorators BEFORE Hydra parses config
import cifar_resnet.models  # noqa: F401
from cifar_resnet.data.cifar import CifarLoadError


def train(cfg: DictConfig) -> L.Trainer:
    """Build datamodule, model, callbacks and trainer from ``cfg`` and fit.

    Raises:
        CifarLoadError: If the dataset directory is missing or malformed.
            Nothing is built or trained in that case.
        ValueError: If ``trainer.max_steps`` is not a positive integer. The
            train sampler is sized from it, so Lightning's unlimited ``-1``
            is not accepted.
    """
    logger.info(f"Configuration:\n{OmegaConf.to_yaml(cfg)}")

    max_steps = cfg.trainer.get("max_steps")
    if not isinstance(max_steps, int) or max_steps <= 0:
        raise ValueError(
            f"trainer.max_steps must be a positive integer, got {max_steps!r}"
        )

    # Seed everything for reproducibility
    L.seed_everything(cfg.get("seed", 42), workers=True)

    # Load data first so a bad data_dir aborts before anything else is built
    datamodule: L.LightningDataModule = hydra.utils.instantiate(cfg.data)
    datamodule.setup("fit")

    model: L.LightningModule = hydra.utils.instantiate(cfg.model)

    # Instantiate loggers
    loggers: list[Any] = []
    if cfg.get("logging"):
        for v in cfg.logging.values():
            if v is not None and "_target_" in v:
                loggers.append(hydra.utils.instantiate(v))

    # Instantiate callbacks
    callbacks: list[L.Callback] = []
    if cfg.get("callbacks"):
        for v in cfg.callbacks.values():
            if v is not None and "_target_" in v:
                callbacks.append(hydra.utils.instantiate(v))

    trainer_cfg: dict[str, Any] = OmegaConf.to_container(  # type: ignore[assignment]
        cfg.trainer, resolve=True
    )
    trainer = L.Trainer(
        **trainer_cfg,
        callbacks=callbacks,
        logger=loggers or False,
    )
    logger.info(
        f"Training on {trainer.strategy.root_device} for "
        f"{trainer_cfg['max_steps']} iterations"
    )

    trainer.fit(model, datamodule=datamodule)
    return trainer


@hydra.main(
    version_base=None, config_path="conf", config_name="train_cifar10_fast_resnet"
)
def main(cfg: DictConfig) -> None:
    """Run training with the given Hydra config."""
    # Setup logging
    logger.remove()
    logger.add(sys.stderr, level=cfg.get("log_level", "INFO"))

    try:
        train(cfg)
    except CifarLoadError as e:
        logger.error(f"Could not load CIFAR-10: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
