"""Serializers for planner outputs."""
