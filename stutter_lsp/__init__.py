"""Language server for Stutter source files."""
