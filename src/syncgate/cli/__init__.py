"""syncgate command line interface."""
