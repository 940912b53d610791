"""Identity & session lifecycle service."""
