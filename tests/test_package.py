"""Smoke test: verify the cifar_resnet package is importable."""

import cifar_resnet


def test_package_version() -> None:
    """Package must declare a __version__ string."""
    assert isinstance(cifar_resnet.__version__, str)
    assert cifar_resnet.__version__ == "0.0.1"
