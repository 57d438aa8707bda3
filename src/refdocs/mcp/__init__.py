"""MCP adapter: resources, tools, and prompts over the service layer."""
