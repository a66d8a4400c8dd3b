"""Fast ResNet training on CIFAR-10."""

__version__ = "0.0.1"
