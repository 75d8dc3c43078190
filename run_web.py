#!/usr/bin/env python
"""Web server startup script for local development."""

import os
import sys

from formforge.config import Config


def main():
    """Start the web server."""
    config_path = sys.argv[1] if len(sys.argv) > 1 else "config.toml"

    config = Config.load_or_default(config_path)

    host = config.web.host
    port = config.web.port

    print(f"Starting web service on http://{host}:{port}")
    print(f"LLM backend: {config.llm.backend.value}")
    print("Press Ctrl+C to stop")

    os.environ["CONFIG_FILE"] = config_path

    import uvicorn

    uvicorn.run(
        "formforge.api:create_app",
        host=host,
        port=port,
        factory=True,
        reload=config.web.reload,
    )


if __name__ == "__main__":
    main()
