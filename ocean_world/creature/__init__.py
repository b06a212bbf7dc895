"""Creature systems - steered sharks."""

from .agent import SteeringAgent, SteeringMode, spawn_agent
