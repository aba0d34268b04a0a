"""Prompt text shared by the LLM classifiers."""

BASE_CONTEXT_PROMPT = """# General Context
You are a git and GitHub search assistant. The specific task to complete is explained below. You must follow the instructions.
"""

BINARY_CLASSIFICATION_SYSTEM_PROMPT = """# Task
You will be given a user query, an instruction, and a tool call output format to follow.

Your job is to read the relevant context, submit your answer to the instruction in the tool call format."""
