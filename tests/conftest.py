"""Pytest configuration for bpmn-model tests."""

import sys
from pathlib import Path

import pytest

# Add the project root to the path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from bpmn_model.config import ModelConfig, ReferencePolicy  # noqa: E402
from bpmn_model.parser import DiagramModel  # noqa: E402

BPMN_NS = "http://www.omg.org/spec/BPMN/20100524/MODEL"
CVDI_NS = "http://cvdi.example.org/schema/1.0"


def make_diagram(body: str) -> str:
    """Wrap process/collaboration markup in a bpmn2:definitions root."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<bpmn2:definitions xmlns:bpmn2="{BPMN_NS}" xmlns:cvdi="{CVDI_NS}" '
        'id="Definitions_1" targetNamespace="http://bpmn.io/schema/bpmn">\n'
        f"{body}\n"
        "</bpmn2:definitions>\n"
    )


# ===========================
# Diagram fixtures
# ===========================

SIMPLE_XML = make_diagram(
    """
  <bpmn2:process id="Process_1" isExecutable="false">
    <bpmn2:startEvent id="s1" name="Start" />
    <bpmn2:task id="t1" name="Do work" />
    <bpmn2:endEvent id="e1" name="End" />
    <bpmn2:sequenceFlow id="f1" sourceRef="s1" targetRef="t1" />
    <bpmn2:sequenceFlow id="f2" sourceRef="t1" targetRef="e1" />
  </bpmn2:process>
"""
)

FULL_XML = make_diagram(
    """
  <bpmn2:collaboration id="Collaboration_1">
    <bpmn2:participant id="Participant_1" name="Customer" processRef="Process_1" />
    <bpmn2:messageFlow id="MessageFlow_1" sourceRef="t2" targetRef="Participant_1" />
  </bpmn2:collaboration>
  <bpmn2:process id="Process_1" name="Review request" isExecutable="false">
    <bpmn2:laneSet id="LaneSet_1">
      <bpmn2:lane id="Lane_1" name="Reviewer">
        <bpmn2:flowNodeRef>t1</bpmn2:flowNodeRef>
      </bpmn2:lane>
      <bpmn2:lane id="Lane_2" name="Approver">
        <bpmn2:flowNodeRef>t2</bpmn2:flowNodeRef>
        <bpmn2:flowNodeRef>e1</bpmn2:flowNodeRef>
      </bpmn2:lane>
    </bpmn2:laneSet>
    <bpmn2:startEvent id="s1" name="Request received" />
    <bpmn2:task id="t1" name="Review" cvdi:neuron="N1" cvdi:action="A1">
      <bpmn2:dataInputAssociation id="DataInputAssociation_1">
        <bpmn2:sourceRef>do1</bpmn2:sourceRef>
      </bpmn2:dataInputAssociation>
    </bpmn2:task>
    <bpmn2:task id="t2" name="Approve" cvdi:neuron="N7" cvdi:action="A3">
      <bpmn2:dataOutputAssociation id="DataOutputAssociation_1">
        <bpmn2:targetRef>do2</bpmn2:targetRef>
      </bpmn2:dataOutputAssociation>
    </bpmn2:task>
    <bpmn2:endEvent id="e1" name="Done" />
    <bpmn2:dataObjectReference id="do1" name="Request" />
    <bpmn2:dataObjectReference id="do2" name="Decision" />
    <bpmn2:sequenceFlow id="f1" sourceRef="s1" targetRef="t1" />
    <bpmn2:sequenceFlow id="f2" sourceRef="t1" targetRef="t2" />
    <bpmn2:sequenceFlow id="f3" sourceRef="t2" targetRef="e1" />
  </bpmn2:process>
"""
)

NO_START_XML = make_diagram(
    """
  <bpmn2:process id="Process_1">
    <bpmn2:task id="t1" name="Orphan" />
    <bpmn2:endEvent id="e1" />
    <bpmn2:sequenceFlow id="f1" sourceRef="t1" targetRef="e1" />
  </bpmn2:process>
"""
)

CYCLE_XML = make_diagram(
    """
  <bpmn2:process id="Process_1">
    <bpmn2:startEvent id="s1" />
    <bpmn2:task id="t1" name="Draft" />
    <bpmn2:task id="t2" name="Revise" />
    <bpmn2:sequenceFlow id="f1" sourceRef="s1" targetRef="t1" />
    <bpmn2:sequenceFlow id="f2" sourceRef="t1" targetRef="t2" />
    <bpmn2:sequenceFlow id="f3" sourceRef="t2" targetRef="t1" />
  </bpmn2:process>
"""
)

BRANCHING_XML = make_diagram(
    """
  <bpmn2:process id="Process_1">
    <bpmn2:startEvent id="s1" />
    <bpmn2:exclusiveGateway id="g1" name="Approved?" />
    <bpmn2:task id="t1" name="Ship" />
    <bpmn2:task id="t2" name="Reject" />
    <bpmn2:endEvent id="e1" />
    <bpmn2:endEvent id="e2" />
    <bpmn2:sequenceFlow id="f1" sourceRef="s1" targetRef="g1" />
    <bpmn2:sequenceFlow id="f2" sourceRef="g1" targetRef="t1" />
    <bpmn2:sequenceFlow id="f3" sourceRef="g1" targetRef="t2" />
    <bpmn2:sequenceFlow id="f4" sourceRef="t1" targetRef="e1" />
    <bpmn2:sequenceFlow id="f5" sourceRef="t2" targetRef="e2" />
  </bpmn2:process>
"""
)

DANGLING_XML = make_diagram(
    """
  <bpmn2:process id="Process_1">
    <bpmn2:laneSet id="LaneSet_1">
      <bpmn2:lane id="Lane_1" name="Clerk">
        <bpmn2:flowNodeRef>t1</bpmn2:flowNodeRef>
        <bpmn2:flowNodeRef>ghost</bpmn2:flowNodeRef>
      </bpmn2:lane>
    </bpmn2:laneSet>
    <bpmn2:startEvent id="s1" />
    <bpmn2:task id="t1" name="File" />
    <bpmn2:sequenceFlow id="f1" sourceRef="s1" targetRef="t1" />
    <bpmn2:sequenceFlow id="f2" sourceRef="t1" targetRef="missing" />
  </bpmn2:process>
"""
)


@pytest.fixture
def simple_xml():
    return SIMPLE_XML


@pytest.fixture
def full_xml():
    return FULL_XML


@pytest.fixture
def model():
    """Unloaded model with metrics disabled."""
    return DiagramModel(ModelConfig(enable_metrics=False))


@pytest.fixture
def strict_model():
    return DiagramModel(
        ModelConfig(reference_policy=ReferencePolicy.STRICT, enable_metrics=False)
    )


@pytest.fixture
def full_model(model):
    model.load_from_text(FULL_XML)
    return model
