# src/mender/agents/sre_team/__init__.py

from .sandbox import ExecutionProbe, ExecutionResult, LanguageProfile

__all__ = ["ExecutionProbe", "ExecutionResult", "LanguageProfile"]
