# cloudsvc/features/__init__.py
from .registry import (
    FEATURES,
    FeatureDescriptor,
    FeatureId,
    UnknownFeatureError,
    get_feature,
    list_features,
)

__all__ = [
    "FEATURES",
    "FeatureDescriptor",
    "FeatureId",
    "UnknownFeatureError",
    "get_feature",
    "list_features",
]
