"""Allow `python -m learnpath`."""

from learnpath.cli import run

if __name__ == "__main__":
    run()
