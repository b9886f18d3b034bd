"""
Diagram Model Configuration

Defines configuration for the DiagramModel: BPMN namespace, vendor
extension attribute names, and the policy applied to unresolved references.
"""

import os
from dataclasses import dataclass
from enum import Enum

BPMN_MODEL_NAMESPACE = "http://www.omg.org/spec/BPMN/20100524/MODEL"
UNKNOWN = "unknown"


class ReferencePolicy(str, Enum):
    """How the model treats IDs that resolve to no element."""

    LENIENT = "lenient"  # Drop the reference, log a warning and count it
    STRICT = "strict"  # Raise ReferenceNotFoundError


@dataclass(frozen=True)
class ModelConfig:
    """Complete diagram model configuration."""

    # Namespace the recognized tags live in
    namespace: str = BPMN_MODEL_NAMESPACE

    # Vendor extension attributes read from task nodes
    neuron_attribute: str = "cvdi:neuron"
    action_attribute: str = "cvdi:action"

    # Sentinel for absent attributes
    unknown_value: str = UNKNOWN

    # Error handling
    reference_policy: ReferencePolicy = ReferencePolicy.LENIENT

    # Observability
    enable_metrics: bool = True

    @property
    def is_strict(self) -> bool:
        return self.reference_policy == ReferencePolicy.STRICT

    @classmethod
    def from_env(cls) -> "ModelConfig":
        """Create model config from environment variables.

        Returns:
            ModelConfig instance
        """
        try:
            policy = ReferencePolicy(
                os.getenv("BPMN_MODEL_REFERENCE_POLICY", ReferencePolicy.LENIENT.value).lower()
            )
        except ValueError:
            policy = ReferencePolicy.LENIENT

        return cls(
            namespace=os.getenv("BPMN_MODEL_NAMESPACE", BPMN_MODEL_NAMESPACE),
            neuron_attribute=os.getenv("BPMN_MODEL_NEURON_ATTRIBUTE", "cvdi:neuron"),
            action_attribute=os.getenv("BPMN_MODEL_ACTION_ATTRIBUTE", "cvdi:action"),
            reference_policy=policy,
            enable_metrics=os.getenv("BPMN_MODEL_ENABLE_METRICS", "true").lower()
            in ("1", "true", "yes"),
        )
