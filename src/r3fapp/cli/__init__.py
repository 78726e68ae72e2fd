from r3fapp.cli.main import cli

__all__ = ["cli"]
