from .builtin import BUILTIN_STYLES
from .capability import CAPABILITY_ENV, Capability, detect_capability
from .registry import (
    StyleRegistry,
    StyleTransform,
    Transform,
    get_registry,
    register_style,
    reset_registry,
    sgr,
)

__all__ = [
    "Capability",
    "CAPABILITY_ENV",
    "detect_capability",
    "StyleRegistry",
    "StyleTransform",
    "Transform",
    "BUILTIN_STYLES",
    "get_registry",
    "register_style",
    "reset_registry",
    "sgr",
]
