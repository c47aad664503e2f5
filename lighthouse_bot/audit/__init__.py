"""Lighthouse audit submodule with a pluggable browser launcher."""

from .launcher import BrowserLauncher, ChromiumLauncher
from .runner import AuditError, Auditor, LighthouseAuditor

__all__ = [
    "AuditError",
    "Auditor",
    "BrowserLauncher",
    "ChromiumLauncher",
    "LighthouseAuditor",
]
