"""Configuration and logging shared by the client, console and CLI."""
