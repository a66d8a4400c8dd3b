"""Training callbacks for cifar_resnet."""

from cifar_resnet.callbacks.model_info import ModelInfoCallback
from cifar_resnet.callbacks.report import (
    LossHistoryCallback,
    TrainingReportCallback,
    format_report,
)
from cifar_resnet.callbacks.statistics import DatasetStatisticsCallback

__all__ = [
    "DatasetStatisticsCallback",
    "LossHistoryCallback",
    "ModelInfoCallback",
    "TrainingReportCallback",
    "format_report",
]
