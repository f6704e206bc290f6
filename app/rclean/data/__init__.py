"""Bundled data files for rclean."""
