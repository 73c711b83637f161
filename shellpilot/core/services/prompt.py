"""
Prompt template — safety preamble + host context + user request.

The list of available commands is rendered from the allow-list the
executor enforces, so the model is never told about a command that would
be refused.
"""

from __future__ import annotations

from typing import Iterable

SYSTEM_PROMPT = """\
You are a helpful AI assistant that can execute commands on the user's system. Your role is to:

1. Understand user requests and translate them into appropriate system commands
2. Only suggest safe, whitelisted commands
3. Provide clear explanations of what you're doing
4. Express confidence in your decisions

Available commands: {commands}

Safety rules:
- Never suggest dangerous commands like 'sudo', 'rm -rf /', 'format', or 'dd'
- Always use safe alternatives
- Explain what each command does
- Be specific about arguments and options

Respond in valid JSON format with thoughts, commands array, explanation, and confidence level."""

RESPONSE_FORMAT = """\
Please respond in valid JSON format with the following structure:
{
  "thoughts": "Your reasoning about what the user wants",
  "commands": [
    {
      "command": "command_name",
      "args": ["arg1", "arg2"],
      "timeout": 30
    }
  ],
  "explanation": "Explain what you're going to do and why",
  "confidence": 0.95
}"""


def system_prompt(allowed: Iterable[str]) -> str:
    return SYSTEM_PROMPT.format(commands=", ".join(allowed))


def build_prompt(user_text: str, context: str, allowed: Iterable[str]) -> str:
    """Assemble the full prompt sent to the backend."""
    return (
        f"{system_prompt(allowed)}\n\n"
        f"Context: {context}\n\n"
        f"User request: {user_text}\n\n"
        f"{RESPONSE_FORMAT}"
    )
