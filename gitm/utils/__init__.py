"""
gitm Utilities

Process and HTTP helpers shared by the git, gh and LLM clients.
"""

from gitm.utils.http_client import http_json_post, http_post
from gitm.utils.subprocess_utils import command_stdout, missing_tools, run_command

__all__ = [
    "command_stdout",
    "http_json_post",
    "http_post",
    "missing_tools",
    "run_command",
]
