"""
Entry point for quizdrill without installing the package.

Run with:
    python main.py practice data/sample_questions.json
    python main.py simulate --questions 20 --accuracy 0.7
"""
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from quizdrill.cli.main import main

if __name__ == "__main__":
    main()
