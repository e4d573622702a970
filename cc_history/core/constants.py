"""
Constants describing the Claude Code log format.

Update these if Claude changes the JSONL layout in future versions.
"""

# Values of the top-level "type" field
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"

# Values of the "type" field of assistant content blocks
BLOCK_TEXT = "text"
BLOCK_TOOL_USE = "tool_use"

# Keys of the assistant message "usage" object
USAGE_INPUT = "input_tokens"
USAGE_OUTPUT = "output_tokens"
USAGE_CACHE_CREATION = "cache_creation_input_tokens"
USAGE_CACHE_READ = "cache_read_input_tokens"

