"""apiconform command line interface."""
