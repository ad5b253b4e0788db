"""Command-line entry point: start the web visualizer."""
import logging
import os

from sortviz.logging_config import setup_logging


def main() -> None:
    level_name = os.environ.get("SORTVIZ_LOG_LEVEL", "INFO").upper()
    setup_logging(level=getattr(logging, level_name, logging.INFO))

    from sortviz.app import app

    host = os.environ.get("SORTVIZ_HOST", "127.0.0.1")
    port = int(os.environ.get("SORTVIZ_PORT", "5000"))

    print("=" * 60)
    print("  Sorting Algorithm Visualizer")
    print("  Starting Flask server...")
    print(f"  Open http://{host}:{port}")
    print("=" * 60)
    app.run(debug=False, host=host, port=port)


if __name__ == "__main__":
    main()
