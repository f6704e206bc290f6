"""rclean - Sweep build artifacts out of nested Cargo projects."""

__version__ = "0.1.0"
