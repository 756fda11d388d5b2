"""
WordPress Request Context
"""

from .contexts import ALL_CONTEXTS, Context
from .environment import StaticEnvironment, StaticScreen
from .errors import InvalidContextError
from .hooks import HookRegistry
from .interfaces import ContextData, IHostEnvironment
from .wp_context import WpContext

__all__ = [
    "ALL_CONTEXTS",
    "Context",
    "ContextData",
    "HookRegistry",
    "IHostEnvironment",
    "InvalidContextError",
    "StaticEnvironment",
    "StaticScreen",
    "WpContext",
]

__version__ = "0.1.0"
