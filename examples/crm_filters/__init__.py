"""
CRM lead filter example showcasing domaintree editing.
"""

from .demo import SAMPLE_DOMAIN, edit_sample_domain, make_selector, run_demo
from .models import build_registry

__all__ = [
    "SAMPLE_DOMAIN",
    "build_registry",
    "edit_sample_domain",
    "make_selector",
    "run_demo",
]
