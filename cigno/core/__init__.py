"""
Core domain layer: exception hierarchy, identifier rules, the project
description parser, storyline outlines and brief heuristics.
"""
