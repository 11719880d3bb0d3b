"""Entry point for running the YouTrack MCP server."""

from youtrack_mcp import main

if __name__ == "__main__":
    main()
