"""bacman command line interface."""
