from .catalog import (
    AgentDescriptor,
    CapabilityKind,
    ParameterSpec,
    SkillDescriptor,
    ToolDescriptor,
)
from .execution import CallRecord, ExecutionContext, ExecutionResult, ExecutorOptions

__all__ = [
    "AgentDescriptor",
    "CallRecord",
    "CapabilityKind",
    "ExecutionContext",
    "ExecutionResult",
    "ExecutorOptions",
    "ParameterSpec",
    "SkillDescriptor",
    "ToolDescriptor",
]
