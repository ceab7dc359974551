"""
Entry point for running the trainer with `python -m trainer`.
"""
import sys

from trainer.cli import main

if __name__ == "__main__":
    sys.exit(main())
