"""
Core layer - domain entities and interfaces.

Contains:
- domain: TestRail entities, commands, parameters and request outcomes
- interfaces: service and transport abstractions
"""
