from src.targets.registry import (
    DuplicateTargetError,
    Target,
    TargetRegistry,
)

__all__ = [
    "DuplicateTargetError",
    "Target",
    "TargetRegistry",
]
