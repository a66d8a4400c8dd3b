"""Pydantic frozen configuration models for cifar_resnet."""

from pydantic import BaseModel, PositiveFloat, PositiveInt, model_validator


class DataModuleConfig(BaseModel, frozen=True):
    """Configuration for CifarDataModule.

    All fields are validated at construction time. Frozen, no mutation after creation.

    ``num_iterations`` sizes the training sampler: one pass over the train
    DataLoader yields exactly ``num_iterations`` random mini-batches.
    """

    data_dir: str = "data"
    batch_size: PositiveInt = 64
    eval_batch_size: PositiveInt = 512
    num_iterations: PositiveInt = 5999
    num_workers: int = 0
    pin_memory: bool = False
    persistent_workers: bool = False

    @model_validator(mode="after")
    def _persistent_workers_requires_workers(self) -> "DataModuleConfig":
        """persistent_workers=True with num_workers=0 silently does nothing."""
        if self.persistent_workers and self.num_workers == 0:
            # Use object.__setattr__ because model is frozen
            object.__setattr__(self, "persistent_workers", False)
        return self


class ModelConfig(BaseModel, frozen=True):
    """Hyperparameters for FastResNetClassificationModel.

    Adam betas and eps stay at the torch defaults.
    """

    num_classes: PositiveInt = 10
    learning_rate: PositiveFloat = 1e-4
    logit_scale: PositiveFloat = 0.125
