"""Command-line front end for split-flap boards."""
