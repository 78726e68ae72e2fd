"""create-r3f-app: scaffold react-three-next projects and migrate their styling."""

__version__ = "0.1.0"
