"""
Entry point for running quizdrill as a module.

Usage:
    python -m quizdrill practice questions.json
    python -m quizdrill simulate
    python -m quizdrill --help
"""
from quizdrill.cli.main import main

if __name__ == "__main__":
    main()
