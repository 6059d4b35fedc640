"""Entrypoint that evaluates any expressions provided on the command line."""

from . import run

if __name__ == "__main__":
    run()
