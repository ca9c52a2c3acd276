"""Command groups for the taskman CLI."""
