"""User-facing interfaces built on the command interpreter."""
