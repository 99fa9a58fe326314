"""HTTP application for Taskboard."""
