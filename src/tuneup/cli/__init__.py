# Copyright (c) Syntropy Systems
"""tuneup CLI."""
