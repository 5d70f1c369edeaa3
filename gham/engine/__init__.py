"""Core engine: context resolution, credential injection and git execution."""

from gham.engine.contexts import ContextManager, CurrentContext, RemovalResult
from gham.engine.injector import CredentialInjector, InvocationPlan, Resolution
from gham.engine.runner import ProcessRunner

__all__ = [
    "ContextManager",
    "CurrentContext",
    "RemovalResult",
    "CredentialInjector",
    "InvocationPlan",
    "Resolution",
    "ProcessRunner",
]
