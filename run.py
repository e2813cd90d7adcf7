#!/usr/bin/env python3
"""Server startup script."""

from code_runner.interfaces.rest.main import run

if __name__ == "__main__":
    run()
