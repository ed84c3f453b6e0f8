"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Colorimetry engine and ΔE formulas on tensors (color)
    - Config validation (validators)
    - YAML I/O (fs)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (colors, compare).

Convenience imports:
    from colordist.utils import color, validators
    from colordist.utils.logging_config import setup_logging, get_logger
"""

from . import color
from . import fs
from . import logging_config
from . import validators

# Common functions for direct import
from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'color',
    'fs',
    'logging_config',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
