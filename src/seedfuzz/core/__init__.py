"""Harness core: registry, mutation engine, process harness, campaign, config."""

from seedfuzz.core.campaign import Campaign
from seedfuzz.core.config import AppConfig, ConfigManager
from seedfuzz.core.engine import build_mutator_set, derive_inputs
from seedfuzz.core.harness import ProcessHarness, resolve_command
from seedfuzz.core.plugin_loader import PluginLoader
from seedfuzz.core.registry import ComponentRegistry
from seedfuzz.core.schema import (
    CampaignReport,
    CampaignState,
    CaseResult,
    ExecutionResult,
    MutatedInput,
    PluginInfo,
    RejectionPolicy,
    Verdict,
)

__all__ = [
    "AppConfig",
    "Campaign",
    "CampaignReport",
    "CampaignState",
    "CaseResult",
    "ComponentRegistry",
    "ConfigManager",
    "ExecutionResult",
    "MutatedInput",
    "PluginInfo",
    "PluginLoader",
    "ProcessHarness",
    "RejectionPolicy",
    "Verdict",
    "build_mutator_set",
    "derive_inputs",
    "resolve_command",
]
