"""LightningDataModule for the CIFAR-10 binary dataset."""

from pathlib import Path
from typing import Any

import lightning as L
import torch
from loguru import logger
from torch.utils.data import DataLoader, RandomSampler, TensorDataset

from cifar_resnet.config import DataModuleConfig
from cifar_resnet.data.cifar import CIFAR10_CLASSES, load_dir
from cifar_resnet.types import CifarSplits, ClassificationBatch


class CifarDataModule(L.LightningDataModule):
    """DataModule serving in-memory CIFAR-10 tensors.

    The whole dataset is read into memory once by :meth:`setup`. Training
    batches are drawn uniformly at random with replacement; one pass over the
    train DataLoader is exactly ``num_iterations`` mini-batches, so a single
    Lightning epoch covers the whole run. The test split doubles as the
    validation set and is served in fixed order in batches of
    ``eval_batch_size``.

    Args:
        config: DataModuleConfig frozen model with all DataLoader parameters.
            If provided, flat kwargs are ignored.
        data_dir: Directory holding the ``*.bin`` batch files (used when
            config is None, e.g. Hydra).
        batch_size: Training mini-batch size (default: 64).
        eval_batch_size: Evaluation batch size (default: 512).
        num_iterations: Number of training mini-batches (default: 5999).
        num_workers: Number of DataLoader workers (default: 0).
        pin_memory: Whether to pin memory (default: False).
        persistent_workers: Keep workers alive between epochs (default: False).
        **kwargs: Absorbs extra Hydra-injected keys (_target_, _recursive_, etc.).
    """

    def __init__(
        self,
        config: DataModuleConfig | None = None,
        *,
        data_dir: str = "data",
        batch_size: int = 64,
        eval_batch_size: int = 512,
        num_iterations: int = 5999,
        num_workers: int = 0,
        pin_memory: bool = False,
        persistent_workers: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__()
        if config is not None:
            self._config = config
        else:
            self._config = DataModuleConfig(
                data_dir=data_dir,
                batch_size=batch_size,
                eval_batch_size=eval_batch_size,
                num_iterations=num_iterations,
                num_workers=num_workers,
                pin_memory=pin_memory,
                persistent_workers=persistent_workers,
            )
        self._data_dir = Path(self._config.data_dir)
        self._splits: CifarSplits | None = None

    @property
    def class_names(self) -> list[str]:
        return CIFAR10_CLASSES

    @property
    def num_classes(self) -> int:
        return len(CIFAR10_CLASSES)

    @property
    def splits(self) -> CifarSplits:
        """Loaded train/test tensors. Requires setup() first."""
        if self._splits is None:
            raise RuntimeError("Call setup() before accessing splits")
        return self._splits

    # ------------------------------------------------------------------
    # LightningDataModule lifecycle
    # ------------------------------------------------------------------

    def setup(self, stage: str | None = None) -> None:
        """Read every batch file into memory.

        Both splits are loaded regardless of ``stage``; repeated calls are
        no-ops. Raises :class:`CifarLoadError` if the directory is unusable.
        """
        if self._splits is not None:
            return
        self._splits = load_dir(self._data_dir)

    @staticmethod
    def _collate_fn(
        batch: list[tuple[torch.Tensor, torch.Tensor]],
    ) -> ClassificationBatch:
        """Collate TensorDataset rows into a ClassificationBatch dict."""
        images = torch.stack([item[0] for item in batch])
        labels = torch.stack([item[1] for item in batch])
        return {"images": images, "labels": labels}

    def _loader(
        self,
        dataset: TensorDataset,
        batch_size: int,
        sampler: RandomSampler | None = None,
    ) -> DataLoader[tuple[torch.Tensor, ...]]:
        return DataLoader(
            dataset,
            batch_size=batch_size,
            sampler=sampler,
            shuffle=False,
            num_workers=self._config.num_workers,
            pin_memory=self._config.pin_memory,
            persistent_workers=self._config.persistent_workers,
            collate_fn=self._collate_fn,
        )

    def train_dataloader(self) -> DataLoader[tuple[torch.Tensor, ...]]:
        """Random mini-batches drawn with replacement from the train split."""
        splits = self.splits
        dataset = TensorDataset(splits.train_images, splits.train_labels)
        sampler = RandomSampler(
            dataset,
            replacement=True,
            num_samples=self._config.batch_size * self._config.num_iterations,
        )
        logger.debug(
            f"Train sampler: {self._config.num_iterations} batches of "
            f"{self._config.batch_size} drawn with replacement"
        )
        return self._loader(dataset, self._config.batch_size, sampler=sampler)

    def val_dataloader(self) -> DataLoader[tuple[torch.Tensor, ...]]:
        """The full test split in order, used for periodic evaluation."""
        splits = self.splits
        dataset = TensorDataset(splits.test_images, splits.test_labels)
        return self._loader(dataset, self._config.eval_batch_size)
