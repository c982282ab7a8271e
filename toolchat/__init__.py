"""
toolchat - command-line chat client for MCP tool servers

Connects to one or more stdio MCP servers, forwards user queries to a hosted
language model and relays the model's tool calls to the owning server.
"""

__version__ = "0.1.0"
