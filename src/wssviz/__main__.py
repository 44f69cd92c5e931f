"""Allow running the visualizer with `python -m wssviz <pid>`."""

from .cli import main_cli

if __name__ == "__main__":
    main_cli()
