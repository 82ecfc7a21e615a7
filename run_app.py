#!/usr/bin/env python3
"""
run_app.py - Start the folio dashboard under Streamlit.

Installed as the ``folio-analyzer-web`` command. Equivalent to

    streamlit run folio_web_app.py --server.port 8501
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

APP_PATH = Path(__file__).resolve().with_name("folio_web_app.py")


def build_command(port: str, headless: bool = False) -> List[str]:
    command = [sys.executable, "-m", "streamlit", "run", str(APP_PATH), "--server.port", str(port)]
    if headless:
        command += ["--server.headless", "true"]
    return command


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="folio-analyzer-web", description="Launch the folio dashboard")
    parser.add_argument(
        "--port",
        default=os.getenv("FOLIO_PORT", "8501"),
        help="Server port (default: $FOLIO_PORT or 8501)",
    )
    parser.add_argument("--headless", action="store_true", help="Do not open a browser window")
    args = parser.parse_args(argv)

    print(f"🏨 Hotel Statement Analyzer on http://localhost:{args.port}")
    print("🛑 Press Ctrl+C to stop")
    try:
        return subprocess.run(build_command(args.port, args.headless)).returncode
    except KeyboardInterrupt:
        print("\n👋 App stopped.")
        return 0


if __name__ == "__main__":
    sys.exit(main())
