"""
Custom agent integration: HTTP client and reply parsing helpers.
"""

from cigno.boundary.agents.custom_agent_client import CustomAgentClient
from cigno.boundary.agents.json_extraction import extract_agent_text, extract_json_object

__all__ = ["CustomAgentClient", "extract_agent_text", "extract_json_object"]
