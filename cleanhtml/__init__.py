from .errors import PolicyConflict
from .policy import DEFAULT_POLICY, Policy
from .sanitize import Sanitizer, clean
from .text import clean_text
from .urls import RewriteWithBase, UrlRelative

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_POLICY",
    "Policy",
    "PolicyConflict",
    "RewriteWithBase",
    "Sanitizer",
    "UrlRelative",
    "clean",
    "clean_text",
]
